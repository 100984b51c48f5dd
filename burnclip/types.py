from collections.abc import Callable
from datetime import datetime
from typing import Any

from botocore.client import BaseClient


# Type aliases for Python dictionaries
type JobEvent = dict[str, Any]
type JobContext = Any
type JobResponse = dict[str, Any]
type AppConfig = dict[str, Any]

# Wall clock returning timezone-aware UTC datetimes
type Clock = Callable[[], datetime]

# Type aliases for boto3 clients
type S3Client = BaseClient
