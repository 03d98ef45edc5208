"""Workflow behaviour flags sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Literal, TypedDict, cast


WorkflowFlagKey = Literal[
    "strict_item_match",
    "enforce_weight_total",
    "notifications_enabled",
    "recent_actions_enabled",
]


class WorkflowFlagValues(TypedDict):
    strict_item_match: bool
    enforce_weight_total: bool
    notifications_enabled: bool
    recent_actions_enabled: bool


@dataclass(frozen=True)
class WorkflowFlagDefinition:
    env_var: str
    default: bool


_WORKFLOW_FLAG_DEFINITIONS: Dict[WorkflowFlagKey, WorkflowFlagDefinition] = {
    "strict_item_match": WorkflowFlagDefinition("STRICT_ITEM_MATCH", False),
    "enforce_weight_total": WorkflowFlagDefinition("ENFORCE_WEIGHT_TOTAL", False),
    "notifications_enabled": WorkflowFlagDefinition("NOTIFICATIONS_ENABLED", True),
    "recent_actions_enabled": WorkflowFlagDefinition("RECENT_ACTIONS_ENABLED", True),
}


def _normalize_bool(value: str | None, default: bool) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


@lru_cache(maxsize=None)
def get_workflow_flags() -> WorkflowFlagValues:
    """Return the cached flag state sourced from the environment."""
    values: Dict[WorkflowFlagKey, bool] = {}
    for key, definition in _WORKFLOW_FLAG_DEFINITIONS.items():
        values[key] = _normalize_bool(os.getenv(definition.env_var), default=definition.default)
    return cast(WorkflowFlagValues, values)


def is_flag_enabled(flag: WorkflowFlagKey) -> bool:
    return get_workflow_flags()[flag]


def strict_item_match() -> bool:
    """Unmatched item ids in an update raise instead of being skipped."""
    return is_flag_enabled("strict_item_match")


def enforce_weight_total() -> bool:
    """CL submission requires item weights summing to exactly 100."""
    return is_flag_enabled("enforce_weight_total")


def notifications_enabled() -> bool:
    return is_flag_enabled("notifications_enabled")


def recent_actions_enabled() -> bool:
    return is_flag_enabled("recent_actions_enabled")


def refresh_workflow_flags() -> None:
    """Invalidate cached flag values (useful for tests)."""
    get_workflow_flags.cache_clear()
