import logging

from snipurl.types import LambdaEvent, LambdaContext, LambdaResponse
from snipurl.constants import Limits
from snipurl.dao.factory import short_url_dao
from snipurl.dao.exceptions import DataStoreError
from snipurl.exceptions import ConfigurationError, InfrastructureError
from snipurl.utils import load_config, shortener_settings, base_url, get_short_url
from snipurl.utils.helpers import guarantee_500_response
from snipurl.utils.runtime import get_user_id
from snipurl.utils.responses import response_200, response_500


logger = logging.getLogger(__name__)

DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle GET /api/urls: list the caller's short URLs, newest first

    Anonymous callers get an empty list rather than an error, so the dashboard
    can render its logged-out state from the same request.

    HTTP responses:
        200: list of records (capped at 50), each with its shortUrl
        500: database or configuration failure
    """
    user_id = get_user_id(event)
    if user_id is None:
        logger.debug('Anonymous listing request. Responding with an empty list.')
        return response_200([])

    try:
        app_config = load_config('list_urls')
        settings = shortener_settings(app_config)
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load configuration for list URLs function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    try:
        dao = short_url_dao(app_config, user_id=user_id)
        short_urls = dao.list_by_owner(owner_id=user_id, limit=Limits.LIST_URLS)
    except DataStoreError:
        logger.exception('Database unavailable. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500(message='failed to list URLs', error_code=DATA_STORE_UNAVAILABLE)

    public_base_url = base_url(event, settings.base_url)
    return response_200([{**u.to_dict(), 'shortUrl': get_short_url(u.shortcode, public_base_url)} for u in short_urls])
