import string
from enum import StrEnum


class Shortener:
    """Short code allocation defaults."""

    # URL-safe alphabet: 26 uppercase + 26 lowercase + 10 digits + '-' and '_'
    ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + '-_'
    SHORTCODE_LENGTH = 6
    MAX_ALLOCATION_ATTEMPTS = 5


class Limits:
    """Request and listing limits."""

    MAX_URL_LENGTH = 2048
    LIST_URLS = 50  # Owner dashboard listing cap (newest first)


class Redis:
    """Redis connection defaults."""

    SOCKET_TIMEOUT = 2.0  # seconds, applies to every store call


class AppConfig:
    """AWS AppConfig client limits."""

    CONNECT_TIMEOUT = 1.0  # seconds
    READ_TIMEOUT = 2.0  # seconds
    MAX_ATTEMPTS = 2
    CACHE_TTL = 60.0  # seconds between polls, the AppConfig default poll interval


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        LOG_FORMAT = 'LOG_FORMAT'
        CONFIG_FILE = 'SNIPURL_CONFIG_FILE'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


class ErrorPage(StrEnum):
    """Query values appended to the front page when a redirect can't be served."""

    NOT_FOUND = 'not_found'
    SERVER_ERROR = 'server_error'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
