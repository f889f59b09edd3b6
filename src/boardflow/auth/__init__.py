"""Auth module public exports."""

from boardflow.auth.base import TokenResolver
from boardflow.auth.resolvers import EnvTokenResolver

__all__ = ["EnvTokenResolver", "TokenResolver"]
