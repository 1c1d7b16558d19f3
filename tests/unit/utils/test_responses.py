"""Unit tests for API Gateway response builders."""

import json

import pytest

from snipurl.utils.responses import CORS_HEADERS, response_200, response_302, response_400, response_404, response_500


def test_response_200():
    response = response_200({'shortCode': 'abc123'})

    assert response['statusCode'] == 200
    assert response['headers']['Content-Type'] == 'application/json'
    assert response['headers']['Access-Control-Allow-Origin'] == '*'
    assert json.loads(response['body']) == {'shortCode': 'abc123'}


def test_response_302():
    response = response_302(location='https://example.com/page')

    assert response['statusCode'] == 302
    assert response['headers'] == {'Location': 'https://example.com/page', **CORS_HEADERS}
    assert json.loads(response['body']) == {}


@pytest.mark.parametrize(
    'builder,status_code,base',
    [
        (response_400, 400, 'Bad Request'),
        (response_404, 404, 'Not Found'),
        (response_500, 500, 'Internal Server Error'),
    ],
)
def test_error_responses(builder, status_code, base):
    plain = builder()
    detailed = builder(message='something broke', error_code='SOMETHING_BROKE')

    assert plain['statusCode'] == detailed['statusCode'] == status_code
    assert json.loads(plain['body']) == {'message': base}
    assert json.loads(detailed['body']) == {'message': f'{base} (something broke)', 'errorCode': 'SOMETHING_BROKE'}
