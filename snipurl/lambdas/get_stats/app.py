import logging

from snipurl.types import LambdaEvent, LambdaContext, LambdaResponse
from snipurl.dao.factory import short_url_dao
from snipurl.dao.exceptions import DataStoreError, ShortURLNotFoundError
from snipurl.exceptions import ConfigurationError, InfrastructureError
from snipurl.utils import load_config, shortener_settings, base_url, get_short_url
from snipurl.utils.helpers import guarantee_500_response
from snipurl.utils.runtime import get_user_id
from snipurl.utils.responses import response_200, response_400, response_404, response_500


logger = logging.getLogger(__name__)

MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle GET /api/stats/{shortcode}: return a short URL record and its click count

    HTTP responses:
        200: shortCode, originalUrl, ownerId, clicks, createdAt, shortUrl
        400: missing shortcode in path parameters
        404: unknown shortcode
        500: database or configuration failure
    """
    try:
        app_config = load_config('get_stats')
        settings = shortener_settings(app_config)
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load configuration for stats function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    try:
        dao = short_url_dao(app_config, user_id=get_user_id(event))
        short_url = dao.get(shortcode=shortcode)
    except ShortURLNotFoundError:
        logger.info('Short URL record not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message='URL not found', error_code=SHORT_URL_NOT_FOUND)
    except DataStoreError:
        logger.exception('Database unavailable. Responding with 500.', extra={'shortcode': shortcode, 'event': DATA_STORE_UNAVAILABLE})
        return response_500(message='failed to fetch statistics', error_code=DATA_STORE_UNAVAILABLE)

    short_url_string = get_short_url(short_url.shortcode, base_url(event, settings.base_url))
    return response_200({**short_url.to_dict(), 'shortUrl': short_url_string})
