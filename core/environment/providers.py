from dishka import Provider, Scope, provide
from pydantic import ValidationError
from core.environment.config import Settings


class ConfigurationError(RuntimeError):
    """Raised when the process environment cannot produce valid settings."""


class EnvironmentProvider(Provider):
    """
    Provider for environment configuration.
    """

    component = "environment"
    scope = Scope.APP

    @provide
    def get_environment(self) -> Settings:
        """
        Provide application settings.

        Returns
        -------
        Settings
            Application settings instance

        Raises
        ------
        ConfigurationError
            If a required variable is missing or malformed
        """
        try:
            return Settings()
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(x) for x in error["loc"]).upper() for error in e.errors()
            )
            raise ConfigurationError(f"Invalid environment configuration: {fields}") from e
