"""Utility functions for application configuration management.

Configuration is resolved in two layers:

1. An optional YAML document at `<project root>/config/<APP_ENV>.yml`:

        active_backend: redis
        redis:
            host: redis.internal
            port: 6379
            db: 0
            timeout: 5
        s3:
            bucket: burnclip-files
            region: eu-central-1

2. Environment variables, which override the YAML values:

        BURNCLIP_BACKEND                                 -> active_backend
        REDIS_HOST, REDIS_PORT, REDIS_DB,
        REDIS_USERNAME, REDIS_PASSWORD, REDIS_TIMEOUT    -> redis.*
        S3_BUCKET, S3_REGION, S3_ENDPOINT_URL,
        S3_PUBLIC_BASE_URL, S3_TIMEOUT                   -> s3.*

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key namespace for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    load_config() -> dict
        Load and validate the backend configuration.

Example:
    >>> from burnclip.utils.config import load_config
    >>> config = load_config()
    >>> config['active_backend']
    'redis'
    >>> config['redis']['host']
    'redis.internal'
"""

import os
import logging
from pathlib import Path

import yaml

from burnclip.constants import ENV, Backend
from burnclip.exceptions import BadConfigurationError, MissingEnvironmentVariableError
from burnclip.types import AppConfig
from burnclip.utils.runtime import running_locally


logger = logging.getLogger(__name__)

# (section, key, environment variable, cast)
_ENV_OVERRIDES = (
    ('redis', 'host', ENV.Redis.HOST, str),
    ('redis', 'port', ENV.Redis.PORT, int),
    ('redis', 'db', ENV.Redis.DB, int),
    ('redis', 'username', ENV.Redis.USERNAME, str),
    ('redis', 'password', ENV.Redis.PASSWORD, str),
    ('redis', 'timeout', ENV.Redis.TIMEOUT, float),
    ('s3', 'bucket', ENV.S3.BUCKET, str),
    ('s3', 'region', ENV.S3.REGION, str),
    ('s3', 'endpoint_url', ENV.S3.ENDPOINT_URL, str),
    ('s3', 'public_base_url', ENV.S3.PUBLIC_BASE_URL, str),
    ('s3', 'timeout', ENV.S3.TIMEOUT, float),
)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Reads PROJECT_ROOT, falling back to the repository checkout this package lives in.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'burnclip'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'burnclip:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _load_yaml_config() -> AppConfig:
    path = project_root() / 'config' / f'{app_env()}.yml'
    if not path.is_file():
        logger.debug('No YAML configuration found.', extra={'path': str(path)})
        return {}

    with open(path) as f:
        try:
            document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise BadConfigurationError(f'Invalid YAML in {path}.') from e

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Expected a mapping at the top of {path}.')
    logger.debug('Loaded YAML configuration.', extra={'path': str(path)})
    return document


def load_config() -> AppConfig:
    """Load the backend configuration from YAML and environment variables

    Returns:
        dict: {'active_backend': <backend>, 'redis': {...}, 's3': {...}}

    Raises:
        BadConfigurationError:
            If the YAML document is invalid, a value can't be cast, or the
            active backend is unknown.
        MissingEnvironmentVariableError:
            If no backend is configured outside local runs, or if the redis
            backend is active but no S3 bucket is configured.

    Example:
        >>> os.environ['BURNCLIP_BACKEND'] = 'memory'
        >>> load_config()['active_backend']
        'memory'
    """
    document = _load_yaml_config()
    config = {
        'active_backend': document.get('active_backend'),
        'redis': dict(document.get('redis') or {}),
        's3': dict(document.get('s3') or {}),
    }

    if os.environ.get(ENV.App.BACKEND):
        config['active_backend'] = os.environ[ENV.App.BACKEND]

    for section, key, name, cast in _ENV_OVERRIDES:
        value = os.environ.get(name)
        if not value:
            continue
        try:
            config[section][key] = cast(value)
        except ValueError as e:
            raise BadConfigurationError(f'Environment variable {name} has an invalid value: {value!r}.') from e

    if config['active_backend'] is None:
        # Only local runs may fall back to the in-process store
        if not running_locally():
            raise MissingEnvironmentVariableError(f"Missing required environment variables: '{ENV.App.BACKEND}'")
        config['active_backend'] = Backend.MEMORY

    try:
        config['active_backend'] = Backend(str(config['active_backend']).lower())
    except ValueError as e:
        supported = ', '.join(b.value for b in Backend)
        raise BadConfigurationError(f"Unknown backend {config['active_backend']!r} (supported: {supported}).") from e

    if config['active_backend'] == Backend.REDIS and not config['s3'].get('bucket'):
        raise MissingEnvironmentVariableError(f"Missing required environment variables: '{ENV.S3.BUCKET}'")

    return config
