from snipurl.services.shorten import ShortenResult, shorten_url
from snipurl.services.resolve import resolve_shortcode
from snipurl.services.clicks import ClickOutcome, record_click, dispatch_click


__all__ = [
    'ShortenResult',
    'shorten_url',
    'resolve_shortcode',
    'ClickOutcome',
    'record_click',
    'dispatch_click',
]
