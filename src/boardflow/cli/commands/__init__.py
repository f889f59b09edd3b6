"""Per-event commands, keyed by CLI name."""

from types import ModuleType

from boardflow.cli.commands import (
    add_domain,
    add_to_project,
    find_fields,
    find_issue,
    move_issue,
    read_config,
    remove_pr,
    set_date,
    staging_to_production,
)

COMMANDS: dict[str, ModuleType] = {
    "add-domain": add_domain,
    "add-to-project": add_to_project,
    "find-fields": find_fields,
    "find-issue": find_issue,
    "move-issue": move_issue,
    "read-config": read_config,
    "remove-pr": remove_pr,
    "set-date": set_date,
    "staging-to-production": staging_to_production,
}

__all__ = ["COMMANDS"]
