"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`) and deployed to the
corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "shortener": {
            "base_url": "https://sn.ip",
            "shortcode_length": 6,
            "alphabet": "ABC...xyz0123456789-_",
            "max_allocation_attempts": 5
        },
        "configs": {
            "shorten_url": {
                "redis": { ... }
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own backend section (e.g., `"shorten_url"`) plus the shared
`"shortener"` section from this document.

Local development:
    - `SNIPURL_CONFIG_FILE` may point to a YAML file holding the same document.
    - `APPCONFIG_AGENT_URL` may point to a local AppConfig agent.
    Both are only honoured when running locally (see `running_locally()`).

Functions:
    app_env() -> str
    app_name() -> str | None
    app_prefix() -> str | None
    project_root() -> Path
    load_config(lambda_name: str) -> LambdaConfiguration
    shortener_settings(app_config: LambdaConfiguration) -> ShortenerSettings
    reset_appconfig_cache() -> None

Example:
    Typical usage inside a Lambda handler:

        >>> from snipurl.utils.config import load_config, shortener_settings
        >>> app_config = load_config('shorten_url')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
        >>> shortener_settings(app_config).shortcode_length
        6
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Callable

import boto3
import botocore.config
import botocore.exceptions
import yaml

from snipurl.types import AppConfigDataClient, ConfigDocument, LambdaConfiguration, ShortenerSection
from snipurl.constants import ENV, AppConfig, Shortener
from snipurl.utils.helpers import require_environment
from snipurl.utils.runtime import running_locally
from snipurl.exceptions import AppConfigError, BadConfigurationError


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.path.dirname(__file__)))


def app_prefix() -> str | None:
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@dataclass(frozen=True)
class ShortenerSettings:
    """Shortcode allocation and link composition settings.

    Attributes:
        base_url (str | None):
            Public base URL for short links. None derives it from the request.
        shortcode_length (int):
            Length of generated shortcodes.
        alphabet (str):
            Characters shortcodes are drawn from.
        max_allocation_attempts (int):
            Shortcodes tried before giving up on a collision streak.
    """

    base_url: str | None = None
    shortcode_length: int = Shortener.SHORTCODE_LENGTH
    alphabet: str = Shortener.ALPHABET
    max_allocation_attempts: int = Shortener.MAX_ALLOCATION_ATTEMPTS

    def __post_init__(self):
        for name in ('shortcode_length', 'max_allocation_attempts'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise BadConfigurationError(f"Shortener setting '{name}' must be a positive integer (given value: {value!r}).")
        if not isinstance(self.alphabet, str) or len(set(self.alphabet)) < 2:
            raise BadConfigurationError(f'Shortener alphabet must hold at least 2 distinct characters (given value: {self.alphabet!r}).')
        if self.base_url is not None:
            components = urllib.parse.urlparse(self.base_url)
            if components.scheme not in {'http', 'https'} or not components.netloc:
                raise BadConfigurationError(f'Bad shortener base URL {self.base_url}')


def shortener_settings(app_config: LambdaConfiguration) -> ShortenerSettings:
    """Build ShortenerSettings from a loaded Lambda configuration.

    Missing keys fall back to defaults, unknown keys are rejected.

    Raises:
        BadConfigurationError: if the 'shortener' section holds invalid values.
    """
    section: ShortenerSection = app_config.get('shortener') or {}
    try:
        return ShortenerSettings(**section)
    except TypeError as e:
        raise BadConfigurationError(f'Bad shortener configuration section: {e}') from e


def _extract_lambda_config(document: ConfigDocument, lambda_name: str) -> LambdaConfiguration:
    """Pick the active backend section of `lambda_name` and the shared shortener section."""
    try:
        backend = document['active_backend']
        data = {backend: document['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise AppConfigError(f"Configuration document has no '{lambda_name}' backend section.") from e

    data['shortener'] = document.get('shortener') or {}
    return data


def _local_yaml_config(func: Callable) -> Callable:
    """Decorator: load the configuration document from a local YAML file.

    Behavior:
        - If the application is running locally and `SNIPURL_CONFIG_FILE` is set,
          parse that file (same structure as the AppConfig JSON document).
        - Else, call the wrapped function.
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        config_file = os.getenv(ENV.App.CONFIG_FILE)
        if not running_locally() or not config_file:
            return func(lambda_name)

        path = Path(config_file)
        if not path.is_absolute():
            path = project_root() / path

        logger.debug('Trying to load configuration from local YAML file.', extra={'path': str(path), 'lambdaName': lambda_name})
        try:
            with path.open('r', encoding='utf-8') as f:
                document = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise BadConfigurationError(f"Can't read configuration file {path}.") from e

        data = _extract_lambda_config(document, lambda_name)
        logger.debug('Loaded configuration from local YAML file.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


def _sam_load_local_appconfig(func: Callable) -> Callable:  # pragma: no cover
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    def __validate_appconfig_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        try:
            with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
                document = json.load(r)
        except (OSError, json.JSONDecodeError) as e:
            raise AppConfigError(f"Can't fetch configuration from local AppConfig agent at {agent_url}.") from e

        data = _extract_lambda_config(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


@dataclass
class _AppConfigSession:
    """Polling state of one AppConfig configuration profile."""

    token: str | None = None
    document: ConfigDocument | None = None
    fetched_at: float = 0.0

    def fresh(self, now: float) -> bool:
        return self.document is not None and now - self.fetched_at < AppConfig.CACHE_TTL


_appconfig_lock = threading.Lock()
_appconfig_client: AppConfigDataClient | None = None
_appconfig_sessions: dict[tuple[str, str, str], _AppConfigSession] = {}


def reset_appconfig_cache() -> None:
    global _appconfig_client
    with _appconfig_lock:
        _appconfig_client = None
        _appconfig_sessions.clear()


def _appconfigdata() -> AppConfigDataClient:
    global _appconfig_client
    if _appconfig_client is None:
        _appconfig_client = boto3.client(
            'appconfigdata',
            config=botocore.config.Config(
                connect_timeout=AppConfig.CONNECT_TIMEOUT,
                read_timeout=AppConfig.READ_TIMEOUT,
                retries={'max_attempts': AppConfig.MAX_ATTEMPTS, 'mode': 'standard'},
            ),
        )
    return _appconfig_client


def _latest_appconfig_document(application: str, environment: str, profile: str) -> ConfigDocument:
    """Return the deployed AppConfig document, polling AWS at most once per CACHE_TTL.

    One appconfigdata client and one configuration session serve every invocation
    of the execution environment. Polls reuse the session's NextPollConfigurationToken;
    an empty payload means the deployed document is unchanged.

    When a poll fails after a document was already fetched, the cached document is
    served and the next poll starts a new session.

    Raises:
        AppConfigError: if AppConfig can't be reached or returns an unusable document.
    """
    session = _appconfig_sessions.setdefault((application, environment, profile), _AppConfigSession())
    now = time.monotonic()
    if session.fresh(now):
        return session.document

    try:
        appconfig = _appconfigdata()
        if session.token is None:
            session.token = appconfig.start_configuration_session(
                ApplicationIdentifier=application,
                EnvironmentIdentifier=environment,
                ConfigurationProfileIdentifier=profile,
            )['InitialConfigurationToken']
        response = appconfig.get_latest_configuration(ConfigurationToken=session.token)
        content = response['Configuration'].read()
    except (botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError) as e:
        session.token = None
        if session.document is None:
            raise AppConfigError("Can't fetch configuration from AWS AppConfig.") from e
        logger.warning('AWS AppConfig unreachable. Serving cached configuration.', exc_info=True, extra={'build': session.document.get('build')})
        session.fetched_at = now
        return session.document

    session.token = response.get('NextPollConfigurationToken')
    session.fetched_at = now
    if content:
        try:
            session.document = json.loads(content.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            session.token = None
            raise AppConfigError('AppConfig returned a malformed configuration document.') from e
    elif session.document is None:
        session.token = None
        raise AppConfigError('AppConfig returned an empty configuration document.')
    return session.document


@_local_yaml_config
@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Returns the backend section relevant to the requested Lambda function
    (e.g., 'shorten_url', 'redirect_url') together with the shared 'shortener'
    section. The document itself is cached for the execution environment's
    lifetime and refreshed at most once per poll interval.

    Environment variables required:
        APPCONFIG_APP_ID       : AppConfig Application ID
        APPCONFIG_ENV_ID       : AppConfig Environment ID
        APPCONFIG_PROFILE_ID   : AppConfig Configuration Profile ID

    Raises:
        MissingEnvironmentVariableError: if an AppConfig identifier is missing.
        AppConfigError: if AppConfig is unreachable, or the document is not valid
            JSON or lacks the lambda's section.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    with _appconfig_lock:
        document = _latest_appconfig_document(
            os.environ[ENV.AppConfig.APP_ID],
            os.environ[ENV.AppConfig.ENV_ID],
            os.environ[ENV.AppConfig.PROFILE_ID],
        )

    data = _extract_lambda_config(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data
