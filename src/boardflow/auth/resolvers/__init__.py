"""Concrete token resolvers."""

from boardflow.auth.resolvers.env import EnvTokenResolver

__all__ = ["EnvTokenResolver"]
