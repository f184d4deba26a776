"""Tests for the request-scoped observation context dependency."""

from typing import Annotated

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from iam.dependencies.observability import get_observation_context
from shared_kernel.observability_context import ObservationContext


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()

    @app.get("/probe-context")
    def probe_context(
        context: Annotated[ObservationContext, Depends(get_observation_context)],
    ):
        return context.as_dict()

    return TestClient(app)


def test_reuses_inbound_request_id(client):
    response = client.get("/probe-context", headers={"x-request-id": "req-42"})

    assert response.json() == {"request_id": "req-42", "path": "/probe-context"}


def test_generates_request_id_when_absent(client):
    """Each request gets its own correlation id."""
    first = client.get("/probe-context").json()["request_id"]
    second = client.get("/probe-context").json()["request_id"]

    assert len(first) == 26
    assert first != second
