"""Unit tests for runtime utilities."""

import pytest

from snipurl.utils.runtime import get_user_id, running_locally


@pytest.mark.parametrize(
    'app_env,sam_local,expected',
    [
        ('local', None, True),
        ('LOCAL', None, True),
        ('dev', 'true', True),
        ('dev', None, False),
        ('prod', 'false', False),
        (None, None, False),
    ],
)
def test_running_locally(monkeypatch, app_env, sam_local, expected):
    for name, value in (('APP_ENV', app_env), ('AWS_SAM_LOCAL', sam_local)):
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    assert running_locally() is expected


def test_get_user_id():
    event = {'requestContext': {'authorizer': {'claims': {'sub': 'user123', 'email': 'me@example.com'}}}}

    assert get_user_id(event) == 'user123'


@pytest.mark.parametrize(
    'event',
    [
        {},
        {'requestContext': None},
        {'requestContext': {}},
        {'requestContext': {'authorizer': {}}},
        {'requestContext': {'authorizer': None}},
        {'requestContext': {'authorizer': {'claims': None}}},
        {'requestContext': {'authorizer': {'claims': {'sub': ''}}}},
    ],
)
def test_get_user_id_anonymous(event):
    assert get_user_id(event) is None
