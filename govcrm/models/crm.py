"""CRM record models: companies, contacts, opportunities, captures, proposals."""

from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from govcrm.database import Base
from govcrm.models.base import TenantOwned, utcnow

OPPORTUNITY_STAGES = (
    "prospecting",
    "qualification",
    "proposal",
    "negotiation",
    "closed_won",
    "closed_lost",
)
CLOSED_STAGES = ("closed_won", "closed_lost")

CAPTURE_PHASES = (
    "phase0_long_range",
    "phase1_positioning",
    "phase2_qualifying",
    "phase3_solution_dev",
    "phase4_proposal",
    "phase5_production",
)


class Company(TenantOwned, Base):
    """Customer, partner or competitor organization."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(
        String(30), nullable=False, default="customer"
    )  # customer|partner|competitor|teaming_partner
    industry: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    duns_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    cage_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    uei_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    naics_codes: Mapped[list | None] = mapped_column(JSON, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    city: Mapped[str | None] = mapped_column(Text, nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    country: Mapped[str] = mapped_column(String(50), nullable=False, default="USA")
    created_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class Contact(TenantOwned, Base):
    __tablename__ = "contacts"

    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    company_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("companies.id"), nullable=True, index=True
    )
    linkedin_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_decision_maker: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contact_role: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class Opportunity(TenantOwned, Base):
    """Sales pipeline entry; expected_revenue is derived from amount and probability."""

    __tablename__ = "opportunities"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    company_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("companies.id"), nullable=True
    )
    type: Mapped[str | None] = mapped_column(
        String(30), nullable=True
    )  # new_business|existing_business|recompete|task_order
    stage: Mapped[str] = mapped_column(String(30), nullable=False, default="prospecting")
    probability: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    expected_revenue: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    close_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class Capture(TenantOwned, Base):
    """Shipley-style capture pursuit for a government contract."""

    __tablename__ = "captures"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    opportunity_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("opportunities.id"), nullable=True
    )
    capture_type: Mapped[str | None] = mapped_column(String(10), nullable=True)  # sole|joint
    current_phase: Mapped[str] = mapped_column(
        String(30), nullable=False, default="phase0_long_range"
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active"
    )  # active|on_hold|won|lost|no_bid
    pwin: Mapped[float | None] = mapped_column(Float, nullable=True)
    contract_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    rfp_release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    proposal_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    strategic_importance: Mapped[str | None] = mapped_column(String(10), nullable=True)
    win_strategy: Mapped[str | None] = mapped_column(Text, nullable=True)
    capture_manager_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class ProposalPackage(TenantOwned, Base):
    """Proposal being prepared in response to an RFP."""

    __tablename__ = "proposal_packages"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    solicitation_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    opportunity_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("opportunities.id"), nullable=True
    )
    capture_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("captures.id"), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft"
    )  # draft|in_progress|review|submitted|won|lost
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    submitted_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completion_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    created_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
