"""Exception hierarchy for boardflow."""

from __future__ import annotations


class BoardflowError(Exception):
    """Base exception for all boardflow errors."""


class ConfigError(BoardflowError):
    """Configuration loading or validation failure."""


class ProviderError(BoardflowError):
    """GitHub transport, HTTP, GraphQL or payload-shape failure."""


class AuthenticationError(ProviderError):
    """Authentication/authorization failure."""


class RetryExhaustedError(BoardflowError):
    """Every attempt of a remote operation failed."""

    def __init__(self, operation: str, *, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"{operation} failed after {attempts} attempts. Last error: {last_error}")
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error


class ResolutionError(BoardflowError):
    """A project field or option could not be resolved by name."""


class FieldNotFoundError(ResolutionError):
    def __init__(self, field_name: str, *, project_id: str) -> None:
        super().__init__(f"Field '{field_name}' not found in project {project_id}")
        self.field_name = field_name
        self.project_id = project_id


class OptionNotFoundError(ResolutionError):
    def __init__(self, option_name: str, *, field_name: str) -> None:
        super().__init__(f"Option '{option_name}' not found in field '{field_name}'")
        self.option_name = option_name
        self.field_name = field_name


class ItemNotFoundError(ResolutionError):
    """The content object has no item on the project and the command needs one."""
