"""CRM record schemas: request bodies in camelCase, persisted rows in snake_case."""

from datetime import date, datetime
from typing import Literal

from pydantic import Field

from govcrm.schemas.common import CamelModel, RowModel

Stage = Literal[
    "prospecting", "qualification", "proposal", "negotiation", "closed_won", "closed_lost"
]
OpportunityType = Literal["new_business", "existing_business", "recompete", "task_order"]
CompanyType = Literal["customer", "partner", "competitor", "teaming_partner"]
CapturePhase = Literal[
    "phase0_long_range",
    "phase1_positioning",
    "phase2_qualifying",
    "phase3_solution_dev",
    "phase4_proposal",
    "phase5_production",
]
CaptureStatus = Literal["active", "on_hold", "won", "lost", "no_bid"]
Importance = Literal["low", "medium", "high", "critical"]
ProposalStatus = Literal["draft", "in_progress", "review", "submitted", "won", "lost"]


# --- Opportunities ---


class OpportunityCreate(CamelModel):
    name: str = Field(min_length=1, max_length=500)
    company_id: int | None = None
    type: OpportunityType | None = None
    stage: Stage = "prospecting"
    amount: float | None = Field(default=None, ge=0)
    probability: float = Field(default=0, ge=0, le=100)
    close_date: date | None = None
    description: str | None = None


class OpportunityUpdate(CamelModel):
    """Partial update; only fields present in the body are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=500)
    company_id: int | None = None
    type: OpportunityType | None = None
    stage: Stage | None = None
    amount: float | None = Field(default=None, ge=0)
    probability: float | None = Field(default=None, ge=0, le=100)
    close_date: date | None = None
    description: str | None = None


class OpportunityRead(RowModel):
    id: int
    tenant_id: int
    name: str
    company_id: int | None
    type: str | None
    stage: str
    probability: float
    amount: float | None
    expected_revenue: float
    close_date: date | None
    description: str | None
    owner_id: int | None
    created_at: datetime
    updated_at: datetime


class OpportunityListItem(OpportunityRead):
    company_name: str | None = None
    owner_name: str | None = None


# --- Contacts ---


class ContactCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    title: str | None = None
    company_id: int | None = None
    linkedin_url: str | None = None
    contact_role: str | None = None
    is_decision_maker: bool = False
    notes: str | None = None


class ContactRead(RowModel):
    id: int
    tenant_id: int
    first_name: str
    last_name: str
    email: str | None
    phone: str | None
    title: str | None
    company_id: int | None
    linkedin_url: str | None
    is_decision_maker: bool
    contact_role: str | None
    notes: str | None
    created_by: int | None
    created_at: datetime
    updated_at: datetime


class ContactListItem(ContactRead):
    company_name: str | None = None


# --- Companies ---


class CompanyCreate(CamelModel):
    name: str = Field(min_length=1, max_length=500)
    type: CompanyType = "customer"
    industry: str | None = None
    website: str | None = None
    naics_codes: list[str] | None = None
    duns_number: str | None = Field(default=None, max_length=20)
    cage_code: str | None = Field(default=None, max_length=10)
    uei_number: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=50)
    city: str | None = None
    state: str | None = Field(default=None, max_length=50)
    country: str = "USA"


class CompanyRead(RowModel):
    id: int
    tenant_id: int
    name: str
    type: str
    industry: str | None
    website: str | None
    naics_codes: list[str] | None
    duns_number: str | None
    cage_code: str | None
    uei_number: str | None
    phone: str | None
    city: str | None
    state: str | None
    country: str
    created_by: int | None
    created_at: datetime
    updated_at: datetime


# --- Captures ---


class CaptureCreate(CamelModel):
    name: str = Field(min_length=1, max_length=500)
    customer_name: str = Field(min_length=1, max_length=500)
    opportunity_id: int | None = None
    capture_type: Literal["sole", "joint"] | None = None
    current_phase: CapturePhase = "phase0_long_range"
    status: CaptureStatus = "active"
    pwin: float | None = Field(default=None, ge=0, le=100)
    contract_value: float | None = Field(default=None, ge=0)
    rfp_release_date: date | None = None
    proposal_due_date: date | None = None
    strategic_importance: Importance | None = None
    win_strategy: str | None = None


class CaptureRead(RowModel):
    id: int
    tenant_id: int
    name: str
    customer_name: str
    opportunity_id: int | None
    capture_type: str | None
    current_phase: str
    status: str
    pwin: float | None
    contract_value: float | None
    rfp_release_date: date | None
    proposal_due_date: date | None
    strategic_importance: str | None
    win_strategy: str | None
    capture_manager_id: int | None
    created_at: datetime
    updated_at: datetime


class CaptureListItem(CaptureRead):
    capture_manager_name: str | None = None


# --- Proposals ---


class ProposalCreate(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    solicitation_number: str | None = Field(default=None, max_length=100)
    opportunity_id: int | None = None
    capture_id: int | None = None
    status: ProposalStatus = "draft"
    due_date: date | None = None


class ProposalUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    solicitation_number: str | None = Field(default=None, max_length=100)
    status: ProposalStatus | None = None
    due_date: date | None = None
    submitted_date: date | None = None
    completion_percentage: float | None = Field(default=None, ge=0, le=100)


class ProposalRead(RowModel):
    id: int
    tenant_id: int
    title: str
    solicitation_number: str | None
    opportunity_id: int | None
    capture_id: int | None
    status: str
    due_date: date | None
    submitted_date: date | None
    completion_percentage: float
    created_by: int | None
    created_at: datetime
    updated_at: datetime


# --- Activity ---


class ActivityRead(RowModel):
    id: int
    user_id: int | None
    activity_type: str
    entity_type: str | None
    entity_id: int | None
    description: str | None
    ip_address: str | None
    created_at: datetime
