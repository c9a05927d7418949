"""HTTP adapter request and response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssignCampaignRequest(BaseModel):
    """Single lead campaign assignment payload."""

    campaign_id: str = Field(..., min_length=1)


class BulkAssignCampaignRequest(BaseModel):
    """Bulk campaign assignment payload."""

    lead_ids: list[str] = Field(..., min_length=1)
    campaign_id: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "lead_ids": ["3f6c1a2e-0c1b-4a57-9d0e-8f1f2b3c4d5e"],
                "campaign_id": "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d",
            }
        }
    )


class AssignAgentRequest(BaseModel):
    """Agent reassignment payload."""

    lead_ids: list[str] = Field(..., min_length=1)
    agent_id: str = Field(..., min_length=1)


class SingleAgentRequest(BaseModel):
    agent_id: str = Field(..., min_length=1)


class DistributeRequest(BaseModel):
    """Pool distribution payload."""

    lead_ids: list[str] = Field(..., min_length=1)
    agent_id: str = Field(..., min_length=1)


class UploadLeadsRequest(BaseModel):
    """Bulk import payload: rows parsed from a spreadsheet, keyed by column header."""

    leads: list[dict[str, Optional[str]]] = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "leads": [
                    {
                        "Full Name": "Alice Smith",
                        "Phone Number": "+1 555 0101",
                        "Sector": "Technology",
                        "Product": "",
                    }
                ]
            }
        }
    )


class CreatePoolRequest(BaseModel):
    name: str = Field(..., min_length=1)
    campaign_id: str = Field(..., min_length=1)


class DuplicateCheckResponse(BaseModel):
    phone_number: str
    exists: bool


class ErrorResponse(BaseModel):
    """Error envelope returned for every handled failure."""

    error: str
    message: str
