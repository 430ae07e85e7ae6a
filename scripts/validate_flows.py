"""Run a validation pass over every listing flow and print the results.

Usage:
    python -m scripts.validate_flows [--dry-run]
Without --dry-run, changed validation statuses are written back in one batch.
Requires FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH.
"""

import asyncio
import sys

from app.application.services.flow_validator import validate_flow
from app.application.services.hash_service import FlowHashService
from app.application.use_cases.flows import ValidateAllFlowsUseCase
from app.core.config import get_settings
from app.infrastructure.firebase.client import close_firebase, init_firebase
from app.infrastructure.firebase.repositories import FirestoreFlowRepository
from app.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Validate all flows; print per-flow errors and drift warnings."""
    settings = get_settings()
    setup_logging()
    client = init_firebase(settings)
    if client is None:
        print("Firestore credentials not configured", file=sys.stderr)
        sys.exit(1)
    dry_run = "--dry-run" in sys.argv[1:]

    try:
        flow_repo = FirestoreFlowRepository(client, settings.flows_collection)
        flows = await flow_repo.list_flows()
        invalid = 0
        for flow in flows:
            result = validate_flow(flow)
            if not result.is_valid:
                invalid += 1
                print(f"{flow.id} ({flow.name}): {len(result.errors)} error(s)")
                for error in result.errors:
                    print(f"  - {error}")
            for warning in result.warnings:
                print(f"  ~ {flow.id}: {warning}")

        if dry_run:
            print(f"Dry run. {len(flows)} flow(s) checked, {invalid} invalid")
            return

        report = await ValidateAllFlowsUseCase(flow_repo, FlowHashService()).execute(flows)
        for warning in report.warnings:
            print(f"WARNING: {warning}")
        print(
            f"Done. {report.flows_checked} flow(s) checked, {invalid} invalid, "
            f"{len(report.updated_flow_ids)} status update(s) written"
        )
    finally:
        await close_firebase()


if __name__ == "__main__":
    asyncio.run(main())
