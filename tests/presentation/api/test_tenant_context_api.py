"""Tenant resolution through the HTTP boundary"""

import pytest

from src.infrastructure.persistence.models import PlanModel
from src.infrastructure.persistence.repositories import TenantRepository


@pytest.fixture
async def tenants(test_db, make_tenant):
    """One ACTIVE tenant (acme) and one on trial (globex)"""
    test_db.add(PlanModel(id="plan-pro", name="Pro", modules=["marketing"], features=[]))
    await test_db.flush()
    repo = TenantRepository(test_db)
    await repo.save(make_tenant(slug="acme"))
    await repo.save(make_tenant(slug="globex", trial_days=14, email="ops@globex.test"))
    await test_db.commit()


@pytest.mark.asyncio
async def test_health_check_healthy(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_tenant_from_header(client, tenants):
    response = await client.get("/tenant", headers={"X-Tenant-Slug": "ACME"})

    assert response.status_code == 200
    data = response.json()
    assert data["slug"] == "acme"
    assert data["plan"] == "Pro"
    assert data["modules"] == ["MARKETING"]


@pytest.mark.asyncio
async def test_tenant_from_subdomain(client, tenants):
    response = await client.get("/tenant", headers={"Host": "acme.bizhub.test:8000"})

    assert response.status_code == 200
    assert response.json()["slug"] == "acme"


@pytest.mark.asyncio
async def test_reserved_subdomain_is_not_a_tenant(client, tenants):
    response = await client.get("/tenant", headers={"Host": "www.bizhub.test"})

    assert response.status_code == 400
    assert response.json()["error"] == "TENANT_UNRESOLVED"


@pytest.mark.asyncio
async def test_trial_tenant_does_not_resolve(client, tenants):
    response = await client.get("/tenant", headers={"X-Tenant-Slug": "globex"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_missing_tenant(client, tenants):
    response = await client.get("/tenant")

    assert response.status_code == 400
    assert response.json()["message"] == "Tenant context is required for this operation"
