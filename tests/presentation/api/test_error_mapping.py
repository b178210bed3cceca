"""Domain error → HTTP status mapping"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.application.exceptions import HandlerNotRegisteredException
from src.domain.exceptions import (InvariantViolationException,
                                   PermissionDeniedError,
                                   ResourceNotFoundException,
                                   TenantLimitExceededException,
                                   TenantNotFoundException,
                                   UnresolvedTenantException,
                                   ValidationException)
from src.presentation.api.errors import register_exception_handlers

ERRORS = {
    "validation": (ValidationException("Campaign name is required", "name"), 422),
    "invariant": (InvariantViolationException("Cannot launch", "Campaign", "COMPLETED"), 409),
    "not-found": (ResourceNotFoundException("Campaign", "c-1"), 404),
    "tenant-not-found": (TenantNotFoundException("t-1"), 404),
    "unresolved": (UnresolvedTenantException(), 400),
    "permission": (PermissionDeniedError("Module MARKETING not in plan"), 403),
    "limit": (TenantLimitExceededException("users", 3, 3), 429),
    "dispatch": (HandlerNotRegisteredException("GetThing", "query"), 500),
}


@pytest.fixture
async def client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/raise/{name}")
    async def raise_error(name: str):
        raise ERRORS[name][0]

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
@pytest.mark.parametrize("name", list(ERRORS))
async def test_status_codes(client, name):
    exc, expected = ERRORS[name]

    response = await client.get(f"/raise/{name}")

    assert response.status_code == expected
    assert response.json()["error"] == exc.error_code


@pytest.mark.asyncio
async def test_body_carries_details(client):
    response = await client.get("/raise/not-found")

    assert response.json() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": "Campaign not found: c-1",
        "details": {"resource_type": "Campaign", "resource_id": "c-1"},
    }


@pytest.mark.asyncio
async def test_dispatch_errors_hide_internals(client):
    response = await client.get("/raise/dispatch")

    assert response.json()["message"] == "Internal server error"
