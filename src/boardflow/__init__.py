"""Public API surface for boardflow."""

from boardflow.branch import extract_issue_number
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
from boardflow.contracts.models import BoardItem, FieldOption, ItemPage, ProjectField, ResolvedField
from boardflow.github import FieldResolver, GitHubClient, ItemLocator
from boardflow.retry import RetryExecutor, with_retry

__all__ = [
    "ActionSettings",
    "AuthenticationError",
    "BoardItem",
    "BoardflowError",
    "ConfigError",
    "FieldNotFoundError",
    "FieldOption",
    "FieldResolver",
    "GitHubClient",
    "ItemLocator",
    "ItemNotFoundError",
    "ItemPage",
    "OptionNotFoundError",
    "ProjectField",
    "ProviderError",
    "ResolutionError",
    "ResolvedField",
    "RetryExecutor",
    "RetryExhaustedError",
    "RetryPolicy",
    "extract_issue_number",
    "require_env",
    "with_retry",
]
