"""Application layer - planner controller, DTOs and configuration handling."""

from .dtos import (
    ComponentDraft,
    MutationResult,
    RackInput,
    normalize_tag,
    parse_rack_height,
)
from .planner import PlannerState, RackPlanner

__all__ = [
    "ComponentDraft",
    "MutationResult",
    "PlannerState",
    "RackInput",
    "RackPlanner",
    "normalize_tag",
    "parse_rack_height",
]
