import base64
import binascii
import json
import logging
from typing import Any

from snipurl.types import LambdaEvent, LambdaContext, LambdaResponse
from snipurl.dao.factory import short_url_dao
from snipurl.dao.exceptions import DataStoreError
from snipurl.exceptions import ConfigurationError, InfrastructureError, InvalidURLError, ShortcodeAllocationError
from snipurl.services import shorten_url
from snipurl.utils import load_config, shortener_settings, base_url, validate_url
from snipurl.utils.helpers import guarantee_500_response
from snipurl.utils.runtime import get_user_id
from snipurl.utils.responses import response_200, response_400, response_500
from snipurl.lambdas.shorten_url.constants import (
    INVALID_JSON,
    MISSING_ORIGINAL_URL,
    INVALID_URL,
    SHORTCODE_ALLOCATION_EXHAUSTED,
    DATA_STORE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def _json_body(event: LambdaEvent) -> Any:
    body = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body, validate=True).decode('utf-8')
    return json.loads(body)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract the (optional) Amazon Cognito user id from the Lambda event
    - Step 2: Extract the original URL from the request body
    - Step 3: Validate the original URL
    - Step 4: Allocate a shortcode and store the mapping (via DAO scoped to the user)
    - Step 5: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            shortCode: newly generated shortcode
            shortUrl: newly generated short url
            originalUrl: original url (provided in request)
            message: success message
        400: Bad client request
            message: cause of bad request (invalid JSON, missing or invalid originalUrl)
            errorCode: INVALID_JSON | MISSING_ORIGINAL_URL | INVALID_URL
        500: Internal server error
            message: indicate the server experienced an internal error
            errorCode: SHORTCODE_ALLOCATION_EXHAUSTED | DATA_STORE_UNAVAILABLE | CONFIGURATION_ERROR

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"originalUrl": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortUrl']
        'https://sn.ip/V1StGX'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
        settings = shortener_settings(app_config)
    except (ConfigurationError, InfrastructureError):
        logger.exception('Failed to load configuration for shorten URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=CONFIGURATION_ERROR)

    # 1- Extract (optional) user id from Cognito
    user_id = get_user_id(event)

    # 2- Extract original URL from request body
    try:
        request_body = _json_body(event)
    except (json.JSONDecodeError, UnicodeDecodeError, binascii.Error):
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    target_url = request_body.get('originalUrl') if isinstance(request_body, dict) else None
    if not target_url:
        logger.info("Missing 'originalUrl' in body. Responding with 400.", extra={'event': MISSING_ORIGINAL_URL})
        return response_400(message="missing 'originalUrl' in JSON body", error_code=MISSING_ORIGINAL_URL)

    # 3- Validate original URL before touching the database
    try:
        validate_url(target_url)
    except InvalidURLError as e:
        logger.info('Invalid URL format. Responding with 400.', extra={'event': INVALID_URL, 'reason': str(e)})
        return response_400(message=f'invalid URL format: {e}', error_code=INVALID_URL)

    # 4- Allocate shortcode and store the mapping
    try:
        dao = short_url_dao(app_config, user_id=user_id)
        result = shorten_url(
            dao,
            target_url,
            base_url=base_url(event, settings.base_url),
            owner_id=user_id,
            settings=settings,
        )
    except ShortcodeAllocationError:
        logger.exception('Shortcode allocation exhausted. Responding with 500.', extra={'event': SHORTCODE_ALLOCATION_EXHAUSTED})
        return response_500(message='failed to shorten URL', error_code=SHORTCODE_ALLOCATION_EXHAUSTED)
    except DataStoreError:
        logger.exception('Database unavailable. Responding with 500.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_500(message='failed to shorten URL', error_code=DATA_STORE_UNAVAILABLE)

    # 5- Return successful response to user
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={'shortcode': result.shortcode, 'event': SHORTEN_SUCCESS},
    )
    return response_200({**result.to_dict(), 'message': 'URL shortened successfully'})
