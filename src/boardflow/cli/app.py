"""CLI app entrypoint."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Mapping

from boardflow.actions.log_handler import configure_logging
from boardflow.actions.outputs import run_command
from boardflow.cli.commands import COMMANDS
from boardflow.cli.parser import build_parser


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    env = dict(os.environ if environ is None else environ)

    verbose = args.verbose or env.get("RUNNER_DEBUG") == "1"
    configure_logging(verbose=verbose)

    module = COMMANDS[args.command]
    return asyncio.run(run_command(lambda: module.run(env), module.TITLE))


__all__ = ["main"]
