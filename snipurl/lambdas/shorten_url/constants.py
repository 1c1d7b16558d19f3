# Logging events / error codes
INVALID_JSON = 'INVALID_JSON'
MISSING_ORIGINAL_URL = 'MISSING_ORIGINAL_URL'
INVALID_URL = 'INVALID_URL'
SHORTCODE_ALLOCATION_EXHAUSTED = 'SHORTCODE_ALLOCATION_EXHAUSTED'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
