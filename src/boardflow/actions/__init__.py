"""GitHub Actions integration: annotations, step outputs and exit codes."""

from boardflow.actions.log_handler import ActionsLogHandler, configure_logging
from boardflow.actions.outputs import exit_code_for, format_output, run_command, set_outputs

__all__ = ["ActionsLogHandler", "configure_logging", "exit_code_for", "format_output", "run_command", "set_outputs"]
