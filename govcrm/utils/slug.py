"""Tenant key generation."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_DASH_RUNS = re.compile(r"-+")


def tenant_key_for(company_name: str) -> str:
    """Lowercase slug of a company name: 'Acme Corp' -> 'acme-corp'."""
    key = _NON_ALNUM.sub("-", company_name.lower())
    key = _DASH_RUNS.sub("-", key)
    return key.strip("-")
