"""Step outputs and command execution for GitHub Actions."""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path

from boardflow.contracts.exceptions import (
    BoardflowError,
    ConfigError,
    ProviderError,
    ResolutionError,
    RetryExhaustedError,
)

logger = logging.getLogger(__name__)

OutputValue = str | int | bool | None


def _render(value: OutputValue) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_output(key: str, value: OutputValue) -> str:
    """Render one ``key=value`` entry in the ``GITHUB_OUTPUT`` file format."""
    text = _render(value)
    if "\n" not in text:
        return f"{key}={text}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
    return f"{key}<<{delimiter}\n{text}\n{delimiter}\n"


def set_outputs(outputs: Mapping[str, OutputValue], path: Path | None = None) -> None:
    """Append ``outputs`` to the step output file, or print them if there is none."""
    rendered = "".join(format_output(key, value) for key, value in outputs.items())
    if path is None:
        sys.stdout.write(rendered)
    else:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(rendered)
    for key, value in outputs.items():
        logger.info("Set output: %s = %s", key, _render(value))


def exit_code_for(exc: BaseException) -> int:
    if isinstance(exc, ConfigError):
        return 3
    if isinstance(exc, (ProviderError, RetryExhaustedError)):
        return 4
    if isinstance(exc, ResolutionError):
        return 5
    return 1


async def run_command(command: Callable[[], Awaitable[None]], name: str) -> int:
    """Run ``command`` with start/finish logging; return a process exit code."""
    logger.info("Starting %s", name)
    try:
        await command()
    except BoardflowError as exc:
        logger.error("%s failed: %s", name, exc)
        return exit_code_for(exc)
    except Exception as exc:  # pragma: no cover
        logger.exception("%s failed: %s", name, exc)
        return 1
    logger.info("%s completed successfully", name)
    return 0
