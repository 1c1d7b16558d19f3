import json
from datetime import datetime, UTC
from typing import cast

import pytest
from pytest import MonkeyPatch

from snipurl.types import LambdaEvent, LambdaContext
from snipurl.lambdas.get_stats import app
from snipurl.models import ShortURLModel
from snipurl.dao.exceptions import DataStoreError
from snipurl.exceptions import MissingEnvironmentVariableError


def _event(path_parameters: dict | None, user_id: str | None = None) -> LambdaEvent:
    event = {
        'resource': '/api/stats/{shortcode}',
        'httpMethod': 'GET',
        'pathParameters': path_parameters,
        'requestContext': {'domainName': 'abc.execute-api.eu-west-1.amazonaws.com', 'stage': 'Prod'},
    }
    if user_id is not None:
        event['requestContext']['authorizer'] = {'claims': {'sub': user_id}}
    return cast(LambdaEvent, event)


class TestGetStatsHandler:

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, memory_dao_factory, memory_store) -> None:
        monkeypatch.setenv('APP_ENV', 'test')
        monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)

        memory_store.records['abc123'] = ShortURLModel(
            target='https://example.com',
            shortcode='abc123',
            owner_id='user123',
            clicks=7,
            created_at=datetime(2025, 10, 15, 8, tzinfo=UTC),
        )

        self.daos = []

        def _short_url_dao(app_config, user_id=None):
            dao = memory_dao_factory(user_id)
            self.daos.append(dao)
            return dao

        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: {'redis': {}})
        monkeypatch.setattr(app, 'short_url_dao', _short_url_dao)

        self.monkeypatch = monkeypatch
        self.context = cast(LambdaContext, {'function_name': 'get_stats'})

    def test_get_stats(self):
        response = app.lambda_handler(_event({'shortcode': 'abc123'}, user_id='user123'), self.context)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {
            'shortCode': 'abc123',
            'originalUrl': 'https://example.com',
            'ownerId': 'user123',
            'clicks': 7,
            'createdAt': '2025-10-15T08:00:00.000Z',
            'shortUrl': 'https://abc.execute-api.eu-west-1.amazonaws.com/Prod/abc123',
        }
        assert self.daos[0].owner_id == 'user123'

    def test_get_stats_anonymous(self):
        response = app.lambda_handler(_event({'shortcode': 'abc123'}), self.context)

        assert response['statusCode'] == 200
        assert json.loads(response['body'])['clicks'] == 7

    def test_unknown_shortcode(self):
        response = app.lambda_handler(_event({'shortcode': 'nope00'}), self.context)

        assert response['statusCode'] == 404
        assert json.loads(response['body']) == {'message': 'Not Found (URL not found)', 'errorCode': 'SHORT_URL_NOT_FOUND'}

    def test_missing_shortcode(self):
        response = app.lambda_handler(_event(None), self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == 'MISSING_SHORTCODE'

    def test_data_store_unavailable(self):
        def _unreachable(app_config, user_id=None):
            raise DataStoreError("Can't connect to Redis at redis.test:6379/0.")

        self.monkeypatch.setattr(app, 'short_url_dao', _unreachable)

        response = app.lambda_handler(_event({'shortcode': 'abc123'}), self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'DATA_STORE_UNAVAILABLE'

    def test_configuration_error(self):
        def _load_config(*a, **kw):
            raise MissingEnvironmentVariableError("Missing required environment variables: 'APPCONFIG_APP_ID'")

        self.monkeypatch.setattr(app, 'load_config', _load_config)

        response = app.lambda_handler(_event({'shortcode': 'abc123'}), self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'CONFIGURATION_ERROR'
