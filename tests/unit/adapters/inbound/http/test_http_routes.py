"""Unit tests for HTTP routes."""

import json
from typing import Optional

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from app.adapters.inbound.http.error_handlers import register_error_handlers
from app.adapters.inbound.http.routes import idempotency_store_key, router
from app.adapters.inbound.http.schemas import BulkAssignCampaignRequest
from app.application.ports.idempotency_store import IdempotencyStore
from app.infrastructure.wiring import dependencies


class InMemoryIdempotencyStore(IdempotencyStore):
    """Dict-backed store for exercising replay behaviour."""

    def __init__(self) -> None:
        self.claims: set[str] = set()
        self.responses: dict[str, str] = {}

    async def reserve(self, key: str, ttl_seconds: int) -> bool:
        if key in self.claims:
            return False
        self.claims.add(key)
        return True

    async def release(self, key: str) -> None:
        self.claims.discard(key)

    async def get_response(self, key: str) -> Optional[str]:
        return self.responses.get(key)

    async def store_response(self, key: str, response: str, ttl_seconds: int) -> None:
        self.responses[key] = response


@pytest.fixture
def idempotency_store():
    return InMemoryIdempotencyStore()


@pytest.fixture
def app(uow_factory, idempotency_store, monkeypatch):
    """Create FastAPI app with router wired to the test database."""
    monkeypatch.setattr(dependencies, "create_unit_of_work_factory", lambda: uow_factory)
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(router)
    app.dependency_overrides[dependencies.create_idempotency_store] = lambda: idempotency_store
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sector_id(seed):
    return seed.sector("General")


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_list_dispositions(client, seed):
    seed.default_catalog()

    response = client.get("/dispositions")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [item["name"] for item in data["first_level"]] == ["Contacted", "Not Contacted"]
    assert len(data["third_level"]) == 10


def test_update_disposition(client, seed):
    catalog = seed.default_catalog()
    lead_id = seed.lead("5550101")

    response = client.put(
        f"/leads/{lead_id}/disposition",
        json={
            "first_level_disposition_id": catalog["Contacted"],
            "second_level_disposition_id": catalog["No Sale"],
            "third_level_disposition_id": catalog["no_sale:Not Interested"],
            "disposition_notes": "Has a provider already",
        },
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["third_level_disposition_id"] == catalog["no_sale:Not Interested"]
    assert data["last_called_at"] is not None


def test_update_disposition_illegal_combination(client, seed):
    """Test a rejected combination returns the 400 error envelope."""
    catalog = seed.default_catalog()
    lead_id = seed.lead("5550102")

    response = client.put(
        f"/leads/{lead_id}/disposition",
        json={
            "first_level_disposition_id": catalog["Not Contacted"],
            "second_level_disposition_id": catalog["Sale"],
        },
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "error": "Validation Error",
        "message": "Sale status can only be set when contact status is Contacted",
    }


def test_update_disposition_unknown_catalog_entry(client, seed):
    lead_id = seed.lead("5550103")

    response = client.put(
        f"/leads/{lead_id}/disposition", json={"first_level_disposition_id": "missing"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Invalid Disposition"


def test_update_disposition_unknown_lead(client, seed):
    catalog = seed.default_catalog()

    response = client.put(
        "/leads/missing/disposition",
        json={"first_level_disposition_id": catalog["Contacted"]},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "Not Found"


def test_create_lead_and_duplicate(client, sector_id):
    payload = {"full_name": "Alice", "phone_number": "+1 555 0104"}

    created = client.post("/leads", json=payload)
    duplicate = client.post("/leads", json={"full_name": "Alice B", "phone_number": "+15550104"})

    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["phone_number"] == "+15550104"
    assert duplicate.status_code == status.HTTP_409_CONFLICT
    assert duplicate.json()["error"] == "Duplicate"
    assert "as a direct lead" in duplicate.json()["message"]


def test_check_duplicate(client, seed):
    seed.lead("+15550105")

    response = client.get("/leads/duplicates", params={"phone_number": "+1 555 0105"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"phone_number": "+15550105", "exists": True}


def test_quick_entry_uses_actor(client, seed, sector_id):
    agent_id = seed.user()
    campaign_id = seed.campaign()

    response = client.post(
        f"/campaigns/{campaign_id}/leads",
        json={"full_name": "Bob", "phone_number": "5550106"},
        headers={"X-Actor-Id": agent_id},
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["assigned_to_id"] == agent_id
    assert seed.lead_count(campaign_id) == 1


def test_assign_campaign_single(client, seed):
    campaign_id = seed.campaign()
    other_id = seed.campaign(name="Other")
    lead_id = seed.lead("5550107")

    first = client.post(f"/leads/{lead_id}/assign-campaign", json={"campaign_id": campaign_id})
    second = client.post(f"/leads/{lead_id}/assign-campaign", json={"campaign_id": other_id})

    assert first.status_code == status.HTTP_200_OK
    assert first.json()["campaign_id"] == campaign_id
    assert second.status_code == status.HTTP_409_CONFLICT
    assert second.json()["error"] == "Already Assigned"


def test_assign_campaign_inactive(client, seed):
    campaign_id = seed.campaign(is_active=False)
    lead_id = seed.lead("5550108")

    response = client.post(f"/leads/{lead_id}/assign-campaign", json={"campaign_id": campaign_id})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Cannot assign leads to an inactive campaign"


def test_bulk_assign_campaign_replays_idempotent_request(client, seed, idempotency_store):
    """Test a repeated Idempotency-Key returns the first response unchanged."""
    campaign_id = seed.campaign()
    lead_ids = [seed.lead("5550201"), seed.lead("5550202")]
    headers = {"Idempotency-Key": "batch-1"}
    payload = {"lead_ids": lead_ids, "campaign_id": campaign_id}

    first = client.post("/leads/assign-campaign", json=payload, headers=headers)
    second = client.post("/leads/assign-campaign", json=payload, headers=headers)
    fresh = client.post("/leads/assign-campaign", json=payload)

    assert first.status_code == status.HTTP_200_OK
    assert first.json()["assigned"] == 2
    assert second.json() == first.json()
    assert fresh.json()["assigned"] == 0
    assert fresh.json()["skipped"] == 2
    assert seed.lead_count(campaign_id) == 2


def test_idempotency_key_in_flight_conflicts(client, seed, idempotency_store):
    campaign_id = seed.campaign()
    lead_id = seed.lead("5550203")
    idempotency_store.claims.add(
        idempotency_store_key(
            f"assign-campaign:{campaign_id}",
            "batch-2",
            BulkAssignCampaignRequest(lead_ids=[lead_id], campaign_id=campaign_id),
        )
    )

    response = client.post(
        "/leads/assign-campaign",
        json={"lead_ids": [lead_id], "campaign_id": campaign_id},
        headers={"Idempotency-Key": "batch-2"},
    )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert seed.get_lead(lead_id).campaign_id is None


def test_reused_key_with_different_body_is_not_replayed(client, seed):
    """Test an Idempotency-Key reused for other leads does not return the old response."""
    campaign_id = seed.campaign()
    first_lead = seed.lead("5550205")
    second_lead = seed.lead("5550206")
    headers = {"Idempotency-Key": "batch-4"}

    first = client.post(
        "/leads/assign-campaign",
        json={"lead_ids": [first_lead], "campaign_id": campaign_id},
        headers=headers,
    )
    second = client.post(
        "/leads/assign-campaign",
        json={"lead_ids": [second_lead], "campaign_id": campaign_id},
        headers=headers,
    )

    assert first.json()["assigned_lead_ids"] == [first_lead]
    assert second.json()["assigned_lead_ids"] == [second_lead]
    assert seed.get_lead(second_lead).campaign_id == campaign_id
    assert seed.lead_count(campaign_id) == 2


def test_failed_request_releases_idempotency_key(client, seed, idempotency_store):
    lead_id = seed.lead("5550204")

    response = client.post(
        "/leads/assign-campaign",
        json={"lead_ids": [lead_id], "campaign_id": "missing"},
        headers={"Idempotency-Key": "batch-3"},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert idempotency_store.claims == set()
    assert idempotency_store.responses == {}


def test_assign_agent(client, seed):
    agent_id = seed.user()
    lead_id = seed.lead("5550301")

    bulk = client.post("/leads/assign", json={"lead_ids": [lead_id], "agent_id": agent_id})
    single = client.put(f"/leads/{lead_id}/agent", json={"agent_id": agent_id})

    assert bulk.status_code == status.HTTP_200_OK
    assert bulk.json()["assigned"] == 1
    assert single.json()["assigned_to_id"] == agent_id


def test_pool_lifecycle(client, seed, sector_id, idempotency_store):
    """Test create, upload, inspect and distribute a pool over HTTP."""
    campaign_id = seed.campaign(name="Pool Campaign")
    agent_id = seed.user(name="Agent Smith")

    created = client.post("/lead-pools", json={"name": "Batch 1", "campaign_id": campaign_id})
    assert created.status_code == status.HTTP_201_CREATED
    pool_id = created.json()["id"]

    upload = client.post(
        f"/lead-pools/{pool_id}/upload",
        json={
            "leads": [
                {"Full Name": "Alice", "Phone Number": "5550401"},
                {"Full Name": "Bob", "Phone Number": "5550402"},
                {"Full Name": "", "Phone Number": "5550403"},
            ]
        },
        headers={"Idempotency-Key": "upload-1"},
    )
    assert upload.status_code == status.HTTP_200_OK
    assert upload.json() == {
        "imported": 2,
        "duplicates": 0,
        "errors": 1,
        "error_details": [{"row": 3, "reason": "Missing Full Name"}],
    }

    leads = client.get(f"/lead-pools/{pool_id}/leads").json()
    assert leads["total"] == 2
    lead_ids = [lead["id"] for lead in leads["data"]]

    distributed = client.post(
        f"/lead-pools/{pool_id}/distribute",
        json={"lead_ids": lead_ids, "agent_id": agent_id},
    )
    assert distributed.status_code == status.HTTP_200_OK
    assert distributed.json()["count"] == 2
    assert distributed.json()["agent_name"] == "Agent Smith"

    again = client.post(
        f"/lead-pools/{pool_id}/distribute",
        json={"lead_ids": lead_ids, "agent_id": agent_id},
    )
    assert again.status_code == status.HTTP_409_CONFLICT
    assert again.json()["error"] == "Some leads are already assigned"

    pool = client.get(f"/lead-pools/{pool_id}").json()
    assert pool["campaign_name"] == "Pool Campaign"
    assert pool["stats"]["total"] == 2
    assert pool["stats"]["assigned"] == 2
    assert [p["id"] for p in client.get("/lead-pools").json()] == [pool_id]
    assert seed.lead_count(campaign_id) == 2
    [stored_key] = idempotency_store.responses
    assert stored_key.startswith(f"upload:{pool_id}:upload-1:")
    stored = json.loads(idempotency_store.responses[stored_key])
    assert stored["imported"] == 2


def test_upload_requires_rows(client, seed):
    pool_id = seed.pool(seed.campaign())

    response = client.post(f"/lead-pools/{pool_id}/upload", json={"leads": []})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Validation Error"


def test_upload_unknown_pool(client, sector_id):
    response = client.post(
        "/lead-pools/missing/upload", json={"leads": [{"name": "A", "phone": "1"}]}
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_missing_sector_is_configuration_error(client, seed):
    pool_id = seed.pool(seed.campaign())

    response = client.post(
        f"/lead-pools/{pool_id}/upload", json={"leads": [{"name": "A", "phone": "5550501"}]}
    )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {
        "error": "Configuration Error",
        "message": "No business sector configured. Please add a sector first.",
    }
