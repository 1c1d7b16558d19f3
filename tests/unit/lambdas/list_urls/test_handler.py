import json
from datetime import datetime, timedelta, UTC
from typing import cast

import pytest
from pytest import MonkeyPatch

from snipurl.types import LambdaEvent, LambdaContext
from snipurl.lambdas.list_urls import app
from snipurl.models import ShortURLModel
from snipurl.dao.exceptions import DataStoreError


def _event(user_id: str | None = None) -> LambdaEvent:
    event = {
        'resource': '/api/urls',
        'httpMethod': 'GET',
        'requestContext': {'domainName': 'sn.ip', 'stage': 'Prod'},
    }
    if user_id is not None:
        event['requestContext']['authorizer'] = {'claims': {'sub': user_id}}
    return cast(LambdaEvent, event)


class TestListUrlsHandler:

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, memory_dao_factory, memory_store) -> None:
        monkeypatch.setenv('APP_ENV', 'test')
        monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)

        created_at = datetime(2025, 10, 15, 8, tzinfo=UTC)
        for i in range(3):
            memory_store.records[f'own00{i}'] = ShortURLModel(
                target=f'https://example.com/{i}',
                shortcode=f'own00{i}',
                owner_id='user123',
                created_at=created_at + timedelta(minutes=i),
            )
        memory_store.records['other0'] = ShortURLModel(target='https://other.example', shortcode='other0', owner_id='user456')
        memory_store.records['anon00'] = ShortURLModel(target='https://anon.example', shortcode='anon00')

        self.load_config_calls = 0

        def _load_config(*a, **kw):
            self.load_config_calls += 1
            return {'redis': {}}

        monkeypatch.setattr(app, 'load_config', _load_config)
        monkeypatch.setattr(app, 'short_url_dao', lambda app_config, user_id=None: memory_dao_factory(user_id))

        self.monkeypatch = monkeypatch
        self.store = memory_store
        self.context = cast(LambdaContext, {'function_name': 'list_urls'})

    def test_list_urls_newest_first(self):
        response = app.lambda_handler(_event('user123'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert [u['shortCode'] for u in body] == ['own002', 'own001', 'own000']
        assert body[0]['shortUrl'] == 'https://sn.ip/own002'
        assert all(u['ownerId'] == 'user123' for u in body)

    def test_list_urls_capped(self):
        for i in range(60):
            self.store.records[f'bulk{i:02d}'] = ShortURLModel(target='https://example.com', shortcode=f'bulk{i:02d}', owner_id='user123')

        body = json.loads(app.lambda_handler(_event('user123'), self.context)['body'])

        assert len(body) == 50

    def test_list_urls_anonymous(self):
        response = app.lambda_handler(_event(), self.context)

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == []
        assert self.load_config_calls == 0

    def test_list_urls_no_links(self):
        response = app.lambda_handler(_event('user789'), self.context)

        assert json.loads(response['body']) == []

    def test_data_store_unavailable(self):
        def _unreachable(app_config, user_id=None):
            raise DataStoreError("Can't connect to Redis at redis.test:6379/0.")

        self.monkeypatch.setattr(app, 'short_url_dao', _unreachable)

        response = app.lambda_handler(_event('user123'), self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body']) == {'message': 'Internal Server Error (failed to list URLs)', 'errorCode': 'DATA_STORE_UNAVAILABLE'}
