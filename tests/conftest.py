from datetime import UTC, datetime

import pytest

from notifier.domain import (
    META_COMMIT_STATUS_KEY,
    META_COMMIT_STATUS_UPDATE_VALUE,
    META_REVISION_KEY,
    Event,
    ObjectReference,
    Severity,
)


@pytest.fixture
def involved_object() -> ObjectReference:
    return ObjectReference(
        kind="Kustomization",
        namespace="flux-system",
        name="apps",
        uid="6b6e2d1c-2f4b-4e0b-9d3a-1f2f0c9e8a11",
        api_version="kustomize.toolkit.fluxcd.io/v1",
    )


@pytest.fixture
def sample_event(involved_object) -> Event:
    return Event(
        involved_object=involved_object,
        severity=Severity.INFO,
        timestamp=datetime(2024, 5, 1, 12, 30, tzinfo=UTC),
        message="Reconciliation finished in 1.2s",
        reason="ReconciliationSucceeded",
        metadata={META_REVISION_KEY: "main@sha1:9f1c2a7"},
        reporting_controller="kustomize-controller",
    )


@pytest.fixture
def commit_status_event(sample_event) -> Event:
    return sample_event.model_copy(
        update={
            "metadata": {
                META_REVISION_KEY: "main@sha1:9f1c2a7",
                META_COMMIT_STATUS_KEY: META_COMMIT_STATUS_UPDATE_VALUE,
            }
        }
    )
