"""API Gateway (Lambda proxy) response builders

Every JSON response carries permissive CORS headers, since the browser dashboard
calls the API from another origin.

Functions:
    response_200(body) -> LambdaResponse
    response_302(*, location) -> LambdaResponse
    response_400(message=None, error_code=None) -> LambdaResponse
    response_404(message=None, error_code=None) -> LambdaResponse
    response_500(message=None, error_code=None) -> LambdaResponse
"""

import json
from typing import Any

from snipurl.types import LambdaResponse


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,Authorization',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def response_json(status_code: int, body: Any, headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict[str, str]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_200(body: Any) -> LambdaResponse:
    return response_json(200, body)


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_json(400, _error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_json(404, _error_body('Not Found', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return response_json(500, _error_body('Internal Server Error', message, error_code))
