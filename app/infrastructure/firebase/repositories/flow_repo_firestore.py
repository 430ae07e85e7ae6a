"""Firestore-backed flow repository (implements IFlowRepository)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx

from app.application.dtos.flow import FlowValidationUpdate
from app.domain.entities.flow import Flow, FlowStep, NextStep
from app.domain.enums import ValidationStatus
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import (
    COLLECTION_PRODUCT_FLOWS,
    FIELD_FLOW_HASH,
    FIELD_IS_ACTIVE,
    FIELD_LAST_VALIDATED,
    FIELD_UPDATED_AT,
    FIELD_VALIDATION_ERRORS,
    FIELD_VALIDATION_STATUS,
)


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _conditions_from(raw: Any) -> dict[str, list[str]] | None:
    """Keep only {str: [str, ...]} entries; anything else is dropped."""
    if not isinstance(raw, dict):
        return None
    return {
        key: [v for v in values if isinstance(v, str)]
        for key, values in raw.items()
        if isinstance(key, str) and isinstance(values, list)
    }


def _next_steps_from(raw: Any) -> list[NextStep]:
    if not isinstance(raw, list):
        return []
    out: list[NextStep] = []
    for item in raw:
        if not isinstance(item, dict):
            out.append(NextStep(step_id=""))
            continue
        out.append(
            NextStep(
                step_id=_str(item.get("stepId")),
                conditions=_conditions_from(item.get("conditions")),
            )
        )
    return out


def _steps_from(raw: Any) -> dict[str, FlowStep]:
    if not isinstance(raw, dict):
        return {}
    steps: dict[str, FlowStep] = {}
    for key, step in raw.items():
        step = step if isinstance(step, dict) else {}
        steps[key] = FlowStep(
            id=_str(step.get("id")),
            step_type=_str(step.get("stepType")),
            title=_str(step.get("title")),
            required=bool(step.get("required", True)),
            next_steps=_next_steps_from(step.get("nextSteps")),
        )
    return steps


def _number(value: Any, kind: type) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return kind(value)


def _status_from(raw: Any) -> ValidationStatus | None:
    if raw in ValidationStatus.values():
        return ValidationStatus(raw)
    return None


def flow_from_document(doc_id: str, data: dict[str, Any]) -> Flow:
    """Build a Flow from a decoded document.

    Tolerant of hand-edited documents: missing or mistyped fields fall back
    to empty values so the validator reports them instead of the load failing.
    """
    errors = data.get("validationErrors")
    return Flow(
        id=doc_id,
        name=_str(data.get("name")),
        description=_str(data.get("description")),
        version=_str(data.get("version")),
        is_active=bool(data.get("isActive", False)),
        is_default=bool(data.get("isDefault", False)),
        start_step_id=_str(data.get("startStepId")),
        steps=_steps_from(data.get("steps")),
        created_at=data.get("createdAt") if isinstance(data.get("createdAt"), datetime) else None,
        updated_at=data.get("updatedAt") if isinstance(data.get("updatedAt"), datetime) else None,
        created_by=_str(data.get("createdBy")),
        usage_count=_number(data.get("usageCount"), int),
        completion_rate=_number(data.get("completionRate"), float),
        last_validated=(
            data.get("lastValidated") if isinstance(data.get("lastValidated"), datetime) else None
        ),
        validation_status=_status_from(data.get("validationStatus")),
        validation_errors=[e for e in errors if isinstance(e, str)] if isinstance(errors, list) else None,
        flow_hash=data.get("flowHash") if isinstance(data.get("flowHash"), str) else None,
    )


def flow_to_document(flow: Flow) -> dict[str, Any]:
    """Serialize a Flow to its document shape (camelCase keys; None fields omitted)."""
    doc: dict[str, Any] = {
        "name": flow.name,
        "description": flow.description,
        "version": flow.version,
        "isActive": flow.is_active,
        "isDefault": flow.is_default,
        "startStepId": flow.start_step_id,
        "steps": {key: step.to_content() for key, step in flow.steps.items()},
        "createdAt": flow.created_at,
        "updatedAt": flow.updated_at,
        "createdBy": flow.created_by,
        "usageCount": flow.usage_count,
        "completionRate": flow.completion_rate,
        "lastValidated": flow.last_validated,
        "validationStatus": flow.validation_status.value if flow.validation_status else None,
        "validationErrors": flow.validation_errors,
        "flowHash": flow.flow_hash,
    }
    return {k: v for k, v in doc.items() if v is not None}


class FirestoreFlowRepository:
    """Flow repository using Firestore (product_flows collection)."""

    def __init__(
        self, client: FirestoreRESTClient, collection: str = COLLECTION_PRODUCT_FLOWS
    ) -> None:
        self._client = client
        self._collection = collection
        self._coll = client.collection(collection)

    async def list_flows(self) -> list[Flow]:
        """Return every flow document."""
        flows: list[Flow] = []
        async for snapshot in self._coll.stream():
            flows.append(flow_from_document(snapshot.id, snapshot.to_dict()))
        return flows

    async def get_by_id(self, flow_id: str) -> Flow | None:
        """Return flow by document id."""
        doc = await self._coll.document(flow_id).get()
        if not doc:
            return None
        return flow_from_document(doc.id, doc.to_dict())

    async def save_flow(self, flow: Flow) -> None:
        """Create or overwrite the flow document."""
        await self._coll.document(flow.id).set(flow_to_document(flow))

    async def set_active(self, flow_id: str, is_active: bool, at: datetime) -> None:
        """Flip isActive; activation also records the validation time.

        Raises ResourceNotFoundException if the document was deleted meanwhile.
        """
        try:
            await self._coll.document(flow_id).update({
                FIELD_IS_ACTIVE: is_active,
                FIELD_UPDATED_AT: at,
                FIELD_LAST_VALIDATED: at,
            })
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                raise ResourceNotFoundException("flow", flow_id) from None
            raise

    async def delete_flow(self, flow_id: str) -> None:
        """Hard-delete the flow document."""
        await self._coll.document(flow_id).delete()

    async def apply_validation_updates(
        self, updates: list[FlowValidationUpdate]
    ) -> None:
        """Commit all status updates in one documents:commit call."""
        writes = [
            {
                "path": f"{self._collection}/{u.flow_id}",
                "update": {
                    FIELD_VALIDATION_STATUS: u.validation_status.value,
                    FIELD_VALIDATION_ERRORS: list(u.validation_errors),
                    FIELD_LAST_VALIDATED: u.validated_at,
                    FIELD_FLOW_HASH: u.flow_hash,
                    FIELD_UPDATED_AT: u.validated_at,
                },
            }
            for u in updates
        ]
        await self._client.batch_write(writes)
