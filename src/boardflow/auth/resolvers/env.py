"""Environment token resolver."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from boardflow.auth.base import TokenResolver
from boardflow.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class EnvTokenResolver(TokenResolver):
    """Reads the first non-empty variable of ``names``.

    ``TOKEN`` is accepted after ``GITHUB_TOKEN`` for workflows that pass a
    personal access token under that name.
    """

    names: tuple[str, ...] = ("GITHUB_TOKEN", "TOKEN")
    environ: Mapping[str, str] | None = field(default=None, compare=False)

    async def resolve(self) -> str:
        env = os.environ if self.environ is None else self.environ
        for name in self.names:
            token = (env.get(name) or "").strip()
            if token:
                return token
        raise AuthenticationError(f"{' or '.join(self.names)} is not set or empty")
