"""
Partner API - FastAPI Dependencies
===================================

Providers injected into route handlers. Tests replace them through
`app.dependency_overrides`, e.g.:

    app.dependency_overrides[get_partner_handler] = lambda: FakePartnerHandler()
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from partner_api.database import get_db_session
from partner_api.services.partner_handler import PartnerHandler
from partner_api.services.partner_service import PartnerService


def get_partner_handler(db: AsyncSession = Depends(get_db_session)) -> PartnerHandler:
    """SQLAlchemy-backed partner handler bound to the request's session."""
    return PartnerService(db)
