"""GitHub Projects access: client, field resolution and item lookup."""

from boardflow.github.client import GitHubClient
from boardflow.github.fields import FieldResolver
from boardflow.github.items import ItemLocator

__all__ = ["FieldResolver", "GitHubClient", "ItemLocator"]
