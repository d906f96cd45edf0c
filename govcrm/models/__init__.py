"""Database models."""

from govcrm.models.tenant import Tenant, User
from govcrm.models.crm import Capture, Company, Contact, Opportunity, ProposalPackage
from govcrm.models.activity import ActivityLogEntry, RateLimitCounter

__all__ = [
    "Tenant",
    "User",
    "Company",
    "Contact",
    "Opportunity",
    "Capture",
    "ProposalPackage",
    "ActivityLogEntry",
    "RateLimitCounter",
]
