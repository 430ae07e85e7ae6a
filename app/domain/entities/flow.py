"""Listing flow domain entities.

A flow is one variant of the product-listing wizard: a graph of steps
(screens) keyed by step id, entered at start_step_id and ending at the
terminal marker "preview".
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import ValidationStatus

TERMINAL_STEP_ID = "preview"


@dataclass
class NextStep:
    """Transition from a step to another step or to the terminal marker."""

    step_id: str
    conditions: dict[str, list[str]] | None = None  # e.g. {"category": ["Women"]}

    def to_content(self) -> dict[str, Any]:
        out: dict[str, Any] = {"stepId": self.step_id}
        if self.conditions is not None:
            out["conditions"] = {k: list(v) for k, v in self.conditions.items()}
        return out


@dataclass
class FlowStep:
    """One node (screen) in a flow's graph."""

    id: str
    step_type: str
    title: str
    required: bool = True
    next_steps: list[NextStep] = field(default_factory=list)

    def to_content(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "stepType": self.step_type,
            "title": self.title,
            "required": self.required,
            "nextSteps": [n.to_content() for n in self.next_steps],
        }


@dataclass
class Flow:
    """Domain entity for a listing flow document (product_flows collection)."""

    id: str
    name: str
    description: str = ""
    version: str = "1.0.0"
    is_active: bool = False
    is_default: bool = False
    start_step_id: str = ""
    steps: dict[str, FlowStep] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str = ""
    usage_count: int | None = None
    completion_rate: float | None = None
    last_validated: datetime | None = None
    validation_status: ValidationStatus | None = None
    validation_errors: list[str] | None = None
    flow_hash: str | None = None

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def semantic_content(self) -> dict[str, Any]:
        """Return the fingerprinted subset: name, start step, steps and version.

        Timestamps, usage counters and validation fields are excluded so the
        fingerprint only changes when the wizard itself changes.
        """
        return {
            "name": self.name,
            "startStepId": self.start_step_id,
            "steps": {key: step.to_content() for key, step in self.steps.items()},
            "version": self.version,
        }
