from snipurl.utils.config import app_env, app_name, project_root, app_prefix, load_config, shortener_settings, ShortenerSettings
from snipurl.utils.helpers import base_url, get_short_url, error_page_url, require_environment, guarantee_500_response
from snipurl.utils.shortener import generate_shortcode
from snipurl.utils.validators import is_valid_url, validate_url
from snipurl.utils.background import fire_and_forget
from snipurl.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'is_valid_url',
    'validate_url',
    'fire_and_forget',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'shortener_settings',
    'ShortenerSettings',
    'base_url',
    'get_short_url',
    'error_page_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
