#!/usr/bin/env python3
"""
Seed script: creates the demo tenant, its admin user, and one company,
contact, opportunity and capture.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from govcrm.auth.passwords import hash_password
from govcrm.config import Settings
from govcrm.database import build_engine, build_session_maker
from govcrm.engine.pipeline import expected_revenue
from govcrm.models import Capture, Company, Contact, Opportunity
from govcrm.storage.repositories import create_tenant, create_user, get_tenant_by_key


TENANT_KEY = "demo"
EMAIL = "demo@example.com"
PASSWORD = "password123"  # Demo password - print this for user


async def seed():
    settings = Settings()
    engine = build_engine(settings)
    session_maker = build_session_maker(engine)

    async with session_maker() as session:
        if await get_tenant_by_key(session, TENANT_KEY):
            print("Demo tenant already exists, nothing to do.")
            await engine.dispose()
            return

        tenant = await create_tenant(session, TENANT_KEY, "Demo Company", EMAIL)
        user = await create_user(
            session,
            tenant_id=tenant.id,
            email=EMAIL,
            password_hash=hash_password(PASSWORD, settings.bcrypt_rounds),
            first_name="Demo",
            last_name="User",
            role="admin",
        )

        company = Company(
            tenant_id=tenant.id,
            name="Acme Government Solutions",
            type="customer",
            industry="Federal Contracting",
            created_by=user.id,
        )
        session.add(company)
        await session.flush()

        session.add(
            Contact(
                tenant_id=tenant.id,
                first_name="John",
                last_name="Anderson",
                email="john@acme.gov",
                company_id=company.id,
                is_decision_maker=True,
                created_by=user.id,
            )
        )
        opportunity = Opportunity(
            tenant_id=tenant.id,
            name="Federal Cloud Migration",
            company_id=company.id,
            type="new_business",
            stage="qualification",
            amount=2500000,
            probability=60,
            expected_revenue=expected_revenue(2500000, 60),
            owner_id=user.id,
        )
        session.add(opportunity)
        await session.flush()

        session.add(
            Capture(
                tenant_id=tenant.id,
                name="DoD Cybersecurity Initiative",
                customer_name="Department of Defense",
                opportunity_id=opportunity.id,
                capture_type="joint",
                current_phase="phase2_qualifying",
                pwin=55,
                contract_value=5000000,
                capture_manager_id=user.id,
            )
        )
        await session.commit()

    await engine.dispose()

    print("Seed complete!")
    print(f"Tenant key: {TENANT_KEY}")
    print(f"Login: {EMAIL} / {PASSWORD}")
    print("Example: curl -X POST http://localhost:8000/api/auth/login \\")
    print('  -H "Content-Type: application/json" \\')
    print(f'  -d \'{{"tenantKey":"{TENANT_KEY}","email":"{EMAIL}","password":"{PASSWORD}"}}\'')


if __name__ == "__main__":
    asyncio.run(seed())
