"""
Partner API - Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures.

Fixture Overview:
    ├── upload_service:  UploadService on a fresh tmp directory
    ├── fake_handler:    In-memory PartnerHandler recording every call
    ├── app / test_client: FastAPI app with both injected, HTTPX AsyncClient on top
    ├── db_session:      AsyncSession on an in-memory SQLite database
    └── mock_db_session: AsyncMock standing in for AsyncSession
"""

import os
import tempfile

# Settings are read at import time; point them at throwaway resources first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="partner_api_test_")
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import partner_api.models  # noqa: F401  (registers tables on Base.metadata)
from partner_api.database import Base
from partner_api.dependencies import get_partner_handler
from partner_api.exceptions import NotFoundError
from partner_api.main import create_app
from partner_api.schemas.partner import (
    PartnerCreate,
    PartnerResponse,
    PartnerSummary,
    PartnerUpdate,
    PartnerWithOffersResponse,
    ServiceOfferResponse,
)
from partner_api.schemas.upload import StoredUpload
from partner_api.services.partner_handler import PartnerHandler
from partner_api.services.upload_service import UploadService, get_upload_service


class FakePartnerHandler(PartnerHandler):
    """
    In-memory PartnerHandler.

    Every call is appended to `calls` as (operation, *args) so tests can
    check exactly what the router forwarded. Set `fail_with` to make every
    operation raise that exception instead.
    """

    def __init__(self):
        self.partners: Dict[int, PartnerResponse] = {}
        self.offers: Dict[int, List[ServiceOfferResponse]] = {}
        self.calls: List[tuple] = []
        self.fail_with: Optional[Exception] = None

    def add_partner(self, name: str, description: str) -> PartnerResponse:
        partner_id = len(self.partners) + 1
        partner = PartnerResponse(id=partner_id, name=name, description=description)
        self.partners[partner_id] = partner
        return partner

    def add_offer(self, partner_id: int, title: str, term_months: int) -> ServiceOfferResponse:
        offer = ServiceOfferResponse(
            uuid=f"offer-{partner_id}-{term_months}",
            partner_id=partner_id,
            title=title,
            term_months=term_months,
            rhythm_kwh_rate=0.11,
            price_1000_kwh=110.0,
            renewable_energy=True,
            description_en="Affordable renewable energy plan.",
        )
        self.offers.setdefault(partner_id, []).append(offer)
        return offer

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _find(self, partner_id: str) -> int:
        try:
            key = int(partner_id)
        except ValueError:
            raise NotFoundError(resource="partner", resource_id=partner_id)
        if key not in self.partners:
            raise NotFoundError(resource="partner", resource_id=partner_id)
        return key

    async def create_partner(self, payload: PartnerCreate) -> PartnerResponse:
        self.calls.append(("create_partner", payload))
        self._check_failure()
        return self.add_partner(payload.name, payload.description)

    async def list_partners(self) -> List[PartnerSummary]:
        self.calls.append(("list_partners",))
        self._check_failure()
        return [
            PartnerSummary(id=p.id, name=p.name, description=p.description)
            for p in self.partners.values()
        ]

    async def get_partner_with_offers(self, partner_id: str) -> PartnerWithOffersResponse:
        self.calls.append(("get_partner_with_offers", partner_id))
        self._check_failure()
        key = self._find(partner_id)
        return PartnerWithOffersResponse(
            partner=self.partners[key],
            service_offers=self.offers.get(key, []),
        )

    async def update_partner(
        self,
        partner_id: str,
        fields: PartnerUpdate,
        files: Dict[str, StoredUpload],
    ) -> PartnerResponse:
        self.calls.append(("update_partner", partner_id, fields, files))
        self._check_failure()
        key = self._find(partner_id)
        updates = fields.model_dump(exclude_none=True)
        updates.update({name: stored.url for name, stored in files.items()})
        partner = self.partners[key].model_copy(update=updates)
        self.partners[key] = partner
        return partner


@pytest.fixture
def upload_service(tmp_path):
    """UploadService on an isolated, already-created directory."""
    service = UploadService(upload_dir=tmp_path / "uploads")
    service.ensure_upload_directory()
    return service


@pytest.fixture
def fake_handler():
    return FakePartnerHandler()


@pytest.fixture
def app(fake_handler, upload_service):
    """Fresh application with the fake handler and tmp upload storage injected."""
    application = create_app()
    application.dependency_overrides[get_partner_handler] = lambda: fake_handler
    application.dependency_overrides[get_upload_service] = lambda: upload_service
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """HTTPX AsyncClient routed straight into the ASGI app (no server, no lifespan)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def db_session():
    """AsyncSession on a private in-memory SQLite database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def mock_db_session():
    """AsyncMock with the AsyncSession methods PartnerService uses."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.add = MagicMock()
    return session
