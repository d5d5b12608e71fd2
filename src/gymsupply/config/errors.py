"""Configuration error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """Raised when a configuration value is unusable.

    ``variables`` names the environment variables involved, when there are any.
    """

    def __init__(self, message: str, *, variables: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.variables = tuple(variables)


class MissingConfigurationError(ConfigurationError):
    """Raised when required environment variables are absent or blank."""

    def __init__(self, variables: Iterable[str]) -> None:
        names = tuple(sorted(variables))
        super().__init__(f"Missing configuration for: {', '.join(names)}", variables=names)
