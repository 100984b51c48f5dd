from burnclip.utils.config import app_env, app_name, project_root, app_prefix, load_config
from burnclip.utils.helpers import utc_now, guarantee_error_response
from burnclip.utils.logging import initialize_logging
from burnclip.utils.runtime import running_locally


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'utc_now',
    'guarantee_error_response',
    'initialize_logging',
    'running_locally',
]
