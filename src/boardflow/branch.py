"""Issue-number extraction from branch names."""

from __future__ import annotations

import logging
import re

from boardflow.contracts.exceptions import ConfigError

logger = logging.getLogger(__name__)

_REF_PREFIX = "refs/heads/"


def strip_ref(branch_ref: str) -> str:
    return branch_ref[len(_REF_PREFIX) :] if branch_ref.startswith(_REF_PREFIX) else branch_ref


def extract_issue_number(branch_ref: str, pattern: str) -> int | None:
    """Extract the issue number captured by the first group of ``pattern``.

    ``refs/heads/`` is stripped before matching. Returns ``None`` when the
    pattern does not match, has no first group, or captures something that
    is not a base-10 integer.

    Raises:
        ConfigError: If ``pattern`` is not a valid regular expression.
    """
    branch = strip_ref(branch_ref)
    try:
        regex = re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"Invalid branch regex {pattern!r}: {exc}") from exc

    match = regex.search(branch)
    captured = match.group(1) if match and regex.groups >= 1 else None
    if not captured:
        logger.info("No issue number found in branch '%s' using regex '%s'", branch, pattern)
        return None

    try:
        number = int(captured, 10)
    except ValueError:
        logger.warning("Branch '%s' matched '%s' but captured non-numeric %r", branch, pattern, captured)
        return None

    logger.info("Extracted issue #%d from branch '%s'", number, branch)
    return number
