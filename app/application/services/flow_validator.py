"""Structural validation of listing flows (required fields, references, cycles).

Pure functions: no I/O, no logging, no mutation of the flow. Malformed flows
produce error lists, never exceptions.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from app.application.dtos.flow import ValidationResult
from app.core.constants import LISTING_SCREEN_IDS
from app.domain.entities.flow import TERMINAL_STEP_ID, Flow


def _targets(flow: Flow, step_id: str) -> Iterator[str]:
    step = flow.steps.get(step_id)
    if step is None:
        return iter(())
    return (n.step_id for n in step.next_steps)


def find_cycles(flow: Flow) -> list[str]:
    """Return one error per cycle reachable from the start step.

    Iterative depth-first walk with an explicit stack. The active path
    decides cycles; the explored set only prevents re-walking finished
    subgraphs. A branch stops at the repeated step and the walk continues
    with its siblings.
    """
    start = flow.start_step_id
    if not start or start == TERMINAL_STEP_ID or start not in flow.steps:
        return []

    errors: list[str] = []
    explored: set[str] = set()
    path: list[str] = [start]
    on_path: set[str] = {start}
    stack: list[tuple[str, Iterator[str]]] = [(start, _targets(flow, start))]

    while stack:
        step_id, targets = stack[-1]
        descended = False
        for target in targets:
            if not target or target == TERMINAL_STEP_ID:
                continue
            if target in on_path:
                cycle = path[path.index(target):] + [target]
                errors.append(f"Circular reference detected: {' -> '.join(cycle)}")
                continue
            if target in explored or target not in flow.steps:
                continue
            path.append(target)
            on_path.add(target)
            stack.append((target, _targets(flow, target)))
            descended = True
            break
        if not descended:
            stack.pop()
            path.pop()
            on_path.discard(step_id)
            explored.add(step_id)

    return errors


def validate_flow(
    flow: Flow, screen_ids: Iterable[str] | None = None
) -> ValidationResult:
    """Validate a flow's structure.

    Args:
        flow: Decoded flow.
        screen_ids: Known step types; defaults to the listing screen registry.

    Returns:
        ValidationResult with errors and warnings in discovery order.
    """
    known_types = LISTING_SCREEN_IDS if screen_ids is None else frozenset(screen_ids)
    errors: list[str] = []
    warnings: list[str] = []

    if not flow.name or not flow.name.strip():
        errors.append("Flow name is required")
    if not flow.start_step_id:
        errors.append("Start step ID is required")
    if not flow.steps:
        errors.append("Flow must have at least one step")

    for key, step in flow.steps.items():
        if not step.id:
            errors.append(f"Step {key} missing id")
        elif step.id != key:
            errors.append(f"Step {key} id does not match its key: {step.id}")
        if not step.title:
            warnings.append(f"Step {key} missing title")
        if not step.step_type:
            errors.append(f"Step {key} missing stepType")
        elif step.step_type not in known_types and step.step_type != TERMINAL_STEP_ID:
            errors.append(f"Step {key} references unknown screen type: {step.step_type}")

        for index, next_step in enumerate(step.next_steps):
            if not next_step.step_id:
                errors.append(f"Step {key} nextStep[{index}] missing stepId")
            elif next_step.step_id != TERMINAL_STEP_ID and next_step.step_id not in flow.steps:
                errors.append(
                    f"Step {key} references non-existent next step: {next_step.step_id}"
                )

    errors.extend(find_cycles(flow))

    if (
        flow.start_step_id
        and flow.start_step_id != TERMINAL_STEP_ID
        and flow.start_step_id not in flow.steps
    ):
        errors.append(f"Start step {flow.start_step_id} does not exist in steps")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
