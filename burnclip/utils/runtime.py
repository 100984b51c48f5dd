import os

from burnclip.constants import ENV


def running_locally() -> bool:
    """Return True if running on a developer machine (APP_ENV=local), False otherwise."""
    return os.getenv(ENV.App.APP_ENV, 'local').lower() == 'local'
