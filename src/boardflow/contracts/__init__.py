"""Public contracts for boardflow."""

from boardflow.contracts.config import ActionSettings, RetryPolicy, require_env
from boardflow.contracts.exceptions import (
    AuthenticationError,
    BoardflowError,
    ConfigError,
    FieldNotFoundError,
    ItemNotFoundError,
    OptionNotFoundError,
    ProviderError,
    ResolutionError,
    RetryExhaustedError,
)
from boardflow.contracts.models import BoardItem, FieldOption, Issue, ItemPage, ProjectField, ResolvedField

__all__ = [
    "ActionSettings",
    "AuthenticationError",
    "BoardItem",
    "BoardflowError",
    "ConfigError",
    "FieldNotFoundError",
    "FieldOption",
    "Issue",
    "ItemNotFoundError",
    "ItemPage",
    "OptionNotFoundError",
    "ProjectField",
    "ProviderError",
    "ResolutionError",
    "ResolvedField",
    "RetryExhaustedError",
    "RetryPolicy",
    "require_env",
]
