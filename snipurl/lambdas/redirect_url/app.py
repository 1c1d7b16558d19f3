import logging

from snipurl.types import LambdaEvent, LambdaContext, LambdaResponse
from snipurl.constants import ErrorPage
from snipurl.dao.factory import short_url_dao
from snipurl.dao.exceptions import DataStoreError, ShortURLNotFoundError
from snipurl.exceptions import ConfigurationError, InfrastructureError
from snipurl.services import resolve_shortcode, dispatch_click
from snipurl.utils import load_config, shortener_settings, base_url, error_page_url
from snipurl.utils.helpers import guarantee_500_response
from snipurl.utils.responses import response_302, response_400, response_404
from snipurl.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    IGNORED_SHORTCODE,
    IGNORED_SHORTCODES,
    SHORT_URL_NOT_FOUND,
    DATA_STORE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    CLICK_NOT_DISPATCHED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Get short URL record from database
    - Step 3: Build the redirect to the target URL
    - Step 4: Hand the click to background accounting (not awaited)

    Failures never surface as raw error pages: unknown shortcodes and database
    outages redirect to the front page with an `error` query parameter, and
    nothing is redirected to an unresolved target.

    HTTP responses:
        302: Redirect
            headers:
                Location: target URL, or <base>/?error=not_found|server_error
        400: Bad client request
            message: missing shortcode in path parameters
        404: Ignored path (e.g. favicon.ico)

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'V1StGX'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
        settings = shortener_settings(app_config)
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load configuration for redirect URL function. Redirecting to error page.', extra={'event': CONFIGURATION_ERROR})
        return response_302(location=error_page_url(base_url(event), ErrorPage.SERVER_ERROR))
    public_base_url = base_url(event, settings.base_url)

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    if shortcode in IGNORED_SHORTCODES:
        logger.debug('Ignored path requested. Responding with 404.', extra={'shortcode': shortcode, 'event': IGNORED_SHORTCODE})
        return response_404()

    # 2- Get short URL record from database
    try:
        dao = short_url_dao(app_config)
        short_url = resolve_shortcode(dao, shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found in database. Redirecting to error page.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_302(location=error_page_url(public_base_url, ErrorPage.NOT_FOUND))
    except DataStoreError:
        logger.exception(
            'Database unavailable. Redirecting to error page.',
            extra={'shortcode': shortcode, 'event': DATA_STORE_UNAVAILABLE},
        )
        return response_302(location=error_page_url(public_base_url, ErrorPage.SERVER_ERROR))

    # 3- Redirect client to target URL
    response = response_302(location=short_url.target)

    # 4- Account the click in the background (best effort)
    try:
        dispatch_click(dao, short_url.shortcode, short_url.clicks)
    except RuntimeError:
        logger.warning('Click dropped: background executor unavailable.', extra={'shortcode': shortcode, 'event': CLICK_NOT_DISPATCHED})

    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response
