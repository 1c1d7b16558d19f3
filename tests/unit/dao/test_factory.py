"""Unit tests for the scoped DAO factory."""

from unittest.mock import MagicMock

import pytest

from snipurl.dao import factory
from snipurl.exceptions import BadConfigurationError


@pytest.fixture
def redis_dao_cls(monkeypatch):
    cls = MagicMock()
    monkeypatch.setattr(factory, 'ShortURLRedisDAO', cls)
    monkeypatch.setattr(factory, 'app_prefix', lambda: 'test-app:test')
    return cls


def test_builds_anonymous_redis_dao(redis_dao_cls):
    app_config = {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}, 'shortener': {}}

    dao = factory.short_url_dao(app_config)

    assert dao is redis_dao_cls.return_value
    redis_dao_cls.assert_called_once_with(
        redis_host='redis.test',
        redis_port=6379,
        redis_db=0,
        prefix='test-app:test',
        owner_id=None,
    )


def test_builds_owner_scoped_redis_dao(redis_dao_cls):
    factory.short_url_dao({'redis': {'host': 'redis.test'}}, user_id='user123')

    assert redis_dao_cls.call_args.kwargs['owner_id'] == 'user123'


def test_unsupported_backend(redis_dao_cls):
    with pytest.raises(BadConfigurationError, match=r"given backends: \['dynamodb'\]"):
        factory.short_url_dao({'dynamodb': {'table': 'links'}, 'shortener': {}})

    redis_dao_cls.assert_not_called()
