"""Domain entities and aggregates.

Pure domain models; no persistence concerns.
"""

from app.domain.entities.flow import TERMINAL_STEP_ID, Flow, FlowStep, NextStep

__all__ = [
    "TERMINAL_STEP_ID",
    "Flow",
    "FlowStep",
    "NextStep",
]
