class SnipURLError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:snipurl_error'


class ValidationError(SnipURLError):
    """Base exception for user-correctable input errors."""

    error_code = 'app:validation_error'


class InvalidURLError(ValidationError):
    """Raised when a target URL is not a well-formed absolute URI."""

    error_code = 'app:invalid_url_error'


class ShortcodeAllocationError(SnipURLError):
    """Raised when no unique shortcode could be allocated within the attempt budget."""

    error_code = 'app:shortcode_allocation_error'


class ConfigurationError(SnipURLError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InfrastructureError(SnipURLError):
    """Base exception for all infrastructure (AWS) errors."""

    error_code = 'infra:infrastructure_error'


class AppConfigError(InfrastructureError):
    """Raised when AppConfig responds with erroneous data."""

    error_code = 'infra:appconfig_error'
