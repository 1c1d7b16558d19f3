# Logging events / error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
IGNORED_SHORTCODE = 'IGNORED_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
CLICK_NOT_DISPATCHED = 'CLICK_NOT_DISPATCHED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'

# Paths browsers request on their own, never valid shortcodes
IGNORED_SHORTCODES = frozenset({'favicon.ico'})
