"""HTTP routes."""

import hashlib
from typing import Awaitable, Callable, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, Header, Query, Response, status
from pydantic import BaseModel

from app.adapters.inbound.http.schemas import (
    AssignAgentRequest,
    AssignCampaignRequest,
    BulkAssignCampaignRequest,
    CreatePoolRequest,
    DistributeRequest,
    DuplicateCheckResponse,
    SingleAgentRequest,
    UploadLeadsRequest,
)
from app.application.dtos.assignment import AgentAssignmentResult, CampaignAssignmentResult
from app.application.dtos.base import DTO
from app.application.dtos.disposition import DispositionCatalogView
from app.application.dtos.lead import DispositionSelection, LeadView, NewLead
from app.application.dtos.pool import (
    DistributionResult,
    ImportSummary,
    LeadPoolView,
    PoolLeadsPage,
)
from app.application.ports.idempotency_store import IdempotencyStore
from app.application.use_cases.assign_leads_to_agent import AssignLeadsToAgent
from app.application.use_cases.assign_leads_to_campaign import AssignLeadsToCampaign
from app.application.use_cases.create_lead import CreateLead
from app.application.use_cases.detect_duplicate_leads import CheckDuplicateLead
from app.application.use_cases.disposition_catalog import DispositionCatalog
from app.application.use_cases.distribute_pool_leads import DistributePoolLeads
from app.application.use_cases.import_pool_leads import ImportPoolLeads
from app.application.use_cases.manage_lead_pools import ManageLeadPools
from app.application.use_cases.update_lead_disposition import UpdateLeadDisposition
from app.domain.errors import ConflictError
from app.domain.value_objects.phone_number import normalize_phone_number
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_operation
from app.infrastructure.wiring.dependencies import (
    create_assign_leads_to_agent,
    create_assign_leads_to_campaign,
    create_check_duplicate_lead,
    create_create_lead,
    create_disposition_catalog,
    create_distribute_pool_leads,
    create_idempotency_store,
    create_import_pool_leads,
    create_manage_lead_pools,
    create_update_lead_disposition,
)

router = APIRouter()


def _start_request(operation: str, **fields) -> str:
    """Generate a request id and log the incoming call."""
    request_id = str(uuid4())
    log_operation(operation=operation, request_id=request_id, component="http", **fields)
    return request_id


def idempotency_store_key(scope: str, idempotency_key: str, payload: BaseModel) -> str:
    """Key a stored response by operation, target, client key and request body."""
    digest = hashlib.sha256(payload.model_dump_json().encode("utf-8")).hexdigest()
    return f"{scope}:{idempotency_key}:{digest}"


async def _run_idempotent(
    scope: str,
    idempotency_key: Optional[str],
    payload: BaseModel,
    store: IdempotencyStore,
    run: Callable[[], Awaitable[DTO]],
) -> Response:
    """
    Execute a bulk operation at most once per Idempotency-Key.

    Without a key the operation simply runs. With a key, a stored response is
    replayed; a key claimed by a request still in flight is rejected; a failed
    request releases its claim so the caller can retry. Reusing a key with a
    different body runs as a separate request.
    """
    if not idempotency_key:
        result = await run()
        return Response(content=result.model_dump_json(), media_type="application/json")

    key = idempotency_store_key(scope, idempotency_key, payload)
    stored = await store.get_response(key)
    if stored is not None:
        return Response(content=stored, media_type="application/json")

    if not await store.reserve(key, settings.idempotency_ttl_seconds):
        raise ConflictError("A request with this Idempotency-Key is already being processed")

    try:
        result = await run()
    except Exception:
        await store.release(key)
        raise

    body = result.model_dump_json()
    await store.store_response(key, body, settings.idempotency_ttl_seconds)
    return Response(content=body, media_type="application/json")


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.put(
    "/leads/{lead_id}/disposition",
    status_code=status.HTTP_200_OK,
    response_model=LeadView,
)
async def update_disposition(
    lead_id: str,
    selection: DispositionSelection,
    use_case: UpdateLeadDisposition = Depends(create_update_lead_disposition),
) -> LeadView:
    """
    Record the outcome of a call.

    Args:
        lead_id: Lead identifier
        selection: Contact status, optional sale status, optional reason and notes

    Returns:
        Updated lead
    """
    request_id = _start_request("update_disposition", lead_id=lead_id)
    return await use_case.execute(lead_id, selection, request_id=request_id)


@router.post(
    "/leads/assign-campaign",
    status_code=status.HTTP_200_OK,
    response_model=CampaignAssignmentResult,
)
async def bulk_assign_campaign(
    request: BulkAssignCampaignRequest,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    use_case: AssignLeadsToCampaign = Depends(create_assign_leads_to_campaign),
    store: IdempotencyStore = Depends(create_idempotency_store),
) -> Response:
    """
    Assign many leads to a campaign.

    Leads that already belong to a campaign or do not exist are reported, not fatal.
    """
    request_id = _start_request(
        "bulk_assign_campaign",
        campaign_id=request.campaign_id,
        lead_count=len(request.lead_ids),
    )
    return await _run_idempotent(
        f"assign-campaign:{request.campaign_id}",
        idempotency_key,
        request,
        store,
        lambda: use_case.assign_many(request.lead_ids, request.campaign_id, request_id=request_id),
    )


@router.post(
    "/leads/{lead_id}/assign-campaign",
    status_code=status.HTTP_200_OK,
    response_model=LeadView,
)
async def assign_campaign(
    lead_id: str,
    request: AssignCampaignRequest,
    use_case: AssignLeadsToCampaign = Depends(create_assign_leads_to_campaign),
) -> LeadView:
    request_id = _start_request("assign_campaign", lead_id=lead_id, campaign_id=request.campaign_id)
    return await use_case.assign_one(lead_id, request.campaign_id, request_id=request_id)


@router.post(
    "/leads/assign",
    status_code=status.HTTP_200_OK,
    response_model=AgentAssignmentResult,
)
async def assign_agent(
    request: AssignAgentRequest,
    use_case: AssignLeadsToAgent = Depends(create_assign_leads_to_agent),
) -> AgentAssignmentResult:
    request_id = _start_request(
        "assign_agent", agent_id=request.agent_id, lead_count=len(request.lead_ids)
    )
    return await use_case.execute(request.lead_ids, request.agent_id, request_id=request_id)


@router.put(
    "/leads/{lead_id}/agent",
    status_code=status.HTTP_200_OK,
    response_model=LeadView,
)
async def reassign_agent(
    lead_id: str,
    request: SingleAgentRequest,
    use_case: AssignLeadsToAgent = Depends(create_assign_leads_to_agent),
) -> LeadView:
    request_id = _start_request("assign_agent", agent_id=request.agent_id, lead_id=lead_id)
    return await use_case.assign_one(lead_id, request.agent_id, request_id=request_id)


@router.get(
    "/leads/duplicates",
    status_code=status.HTTP_200_OK,
    response_model=DuplicateCheckResponse,
)
async def check_duplicate(
    phone_number: str = Query(..., min_length=1),
    use_case: CheckDuplicateLead = Depends(create_check_duplicate_lead),
) -> DuplicateCheckResponse:
    return DuplicateCheckResponse(
        phone_number=normalize_phone_number(phone_number),
        exists=await use_case.exists(phone_number),
    )


@router.post("/leads", status_code=status.HTTP_201_CREATED, response_model=LeadView)
async def create_lead(
    new_lead: NewLead,
    use_case: CreateLead = Depends(create_create_lead),
) -> LeadView:
    """
    Public lead submission.

    Returns:
        Created lead

    Raises:
        DuplicateLeadError: 409 when the phone number is already registered
    """
    request_id = _start_request("create_lead", campaign_id=new_lead.campaign_id)
    return await use_case.execute(new_lead, request_id=request_id)


@router.post(
    "/campaigns/{campaign_id}/leads",
    status_code=status.HTTP_201_CREATED,
    response_model=LeadView,
)
async def quick_add_lead(
    campaign_id: str,
    new_lead: NewLead,
    actor_id: Optional[str] = Header(None, alias="X-Actor-Id"),
    use_case: CreateLead = Depends(create_create_lead),
) -> LeadView:
    """Agent quick entry of a lead into a campaign; the acting agent owns the lead."""
    request_id = _start_request("quick_add_lead", campaign_id=campaign_id, actor_id=actor_id)
    return await use_case.add_to_campaign(campaign_id, new_lead, actor_id, request_id=request_id)


@router.post("/lead-pools", status_code=status.HTTP_201_CREATED, response_model=LeadPoolView)
async def create_pool(
    request: CreatePoolRequest,
    actor_id: Optional[str] = Header(None, alias="X-Actor-Id"),
    use_case: ManageLeadPools = Depends(create_manage_lead_pools),
) -> LeadPoolView:
    request_id = _start_request("create_pool", campaign_id=request.campaign_id)
    return await use_case.create_pool(
        request.name, request.campaign_id, actor_id=actor_id, request_id=request_id
    )


@router.get("/lead-pools", status_code=status.HTTP_200_OK, response_model=list[LeadPoolView])
async def list_pools(
    use_case: ManageLeadPools = Depends(create_manage_lead_pools),
) -> list[LeadPoolView]:
    return await use_case.list_pools()


@router.get("/lead-pools/{pool_id}", status_code=status.HTTP_200_OK, response_model=LeadPoolView)
async def get_pool(
    pool_id: str,
    use_case: ManageLeadPools = Depends(create_manage_lead_pools),
) -> LeadPoolView:
    return await use_case.get_pool(pool_id)


@router.get(
    "/lead-pools/{pool_id}/leads",
    status_code=status.HTTP_200_OK,
    response_model=PoolLeadsPage,
)
async def list_pool_leads(
    pool_id: str,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    show_all: bool = Query(False),
    use_case: ManageLeadPools = Depends(create_manage_lead_pools),
) -> PoolLeadsPage:
    """
    Page through a pool's leads.

    Only leads without an agent are listed unless show_all is set.
    """
    return await use_case.list_pool_leads(pool_id, page=page, limit=limit, show_all=show_all)


@router.post(
    "/lead-pools/{pool_id}/distribute",
    status_code=status.HTTP_200_OK,
    response_model=DistributionResult,
)
async def distribute_pool_leads(
    pool_id: str,
    request: DistributeRequest,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    use_case: DistributePoolLeads = Depends(create_distribute_pool_leads),
    store: IdempotencyStore = Depends(create_idempotency_store),
) -> Response:
    """Hand selected unassigned pool leads to an agent."""
    request_id = _start_request(
        "distribute_pool_leads",
        pool_id=pool_id,
        agent_id=request.agent_id,
        lead_count=len(request.lead_ids),
    )
    return await _run_idempotent(
        f"distribute:{pool_id}",
        idempotency_key,
        request,
        store,
        lambda: use_case.execute(
            pool_id, request.lead_ids, request.agent_id, request_id=request_id
        ),
    )


@router.post(
    "/lead-pools/{pool_id}/upload",
    status_code=status.HTTP_200_OK,
    response_model=ImportSummary,
)
async def upload_pool_leads(
    pool_id: str,
    request: UploadLeadsRequest,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    use_case: ImportPoolLeads = Depends(create_import_pool_leads),
    store: IdempotencyStore = Depends(create_idempotency_store),
) -> Response:
    """
    Import spreadsheet rows into a pool.

    Row failures and duplicates are reported in the summary; the request itself only
    fails when the pool is missing or no default sector is configured.
    """
    request_id = _start_request("upload_pool_leads", pool_id=pool_id, row_count=len(request.leads))
    return await _run_idempotent(
        f"upload:{pool_id}",
        idempotency_key,
        request,
        store,
        lambda: use_case.execute(pool_id, request.leads, request_id=request_id),
    )


@router.get(
    "/dispositions",
    status_code=status.HTTP_200_OK,
    response_model=DispositionCatalogView,
)
async def list_dispositions(
    active_only: bool = Query(True),
    use_case: DispositionCatalog = Depends(create_disposition_catalog),
) -> DispositionCatalogView:
    return await use_case.execute(active_only=active_only)
