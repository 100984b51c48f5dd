import string
from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Clip lifetime after creation (1 hour in seconds)
    CLIP = 3_600  # 60 * 60
    # Extra time expired clips are kept in Redis so redeem can report them as expired (1 day in seconds)
    CLIP_RETENTION = 86_400  # 60 * 60 * 24


class Code:
    """Clip code format."""

    ALPHABET = string.ascii_uppercase + string.digits
    LENGTH = 3  # 36 ** 3 = 46656 possible codes


class Retry:
    """Retry ceilings."""

    CODE_GENERATION = 1_000  # Candidate codes drawn before giving up on a full codespace
    CODE_COLLISION = 3  # Fresh codes tried when a concurrent sender claims ours first


class Timeout:
    """Store and blob call timeouts in seconds."""

    REDIS = 5.0
    S3 = 10.0


class Backend(StrEnum):
    REDIS = 'redis'
    MEMORY = 'memory'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'
        BACKEND = 'BURNCLIP_BACKEND'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105
        TIMEOUT = 'REDIS_TIMEOUT'

    class S3(StrEnum):
        BUCKET = 'S3_BUCKET'
        REGION = 'S3_REGION'
        ENDPOINT_URL = 'S3_ENDPOINT_URL'  # usually http://localstack:4566 when running locally
        PUBLIC_BASE_URL = 'S3_PUBLIC_BASE_URL'
        TIMEOUT = 'S3_TIMEOUT'


# Error codes
UNKNOWN_INTERNAL_ERROR = 'UNKNOWN_INTERNAL_ERROR'
CLIP_CORRUPTED = 'CLIP_CORRUPTED'
