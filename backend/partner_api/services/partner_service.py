"""
Partner API - Partner Service (SQLAlchemy Handler)
===================================================

What:  PartnerHandler implementation backed by the async SQLAlchemy session.
Who:   Built per request by dependencies.get_partner_handler.
When:  For every /partners operation.

Error Handling Strategy:
    NotFoundError propagates unchanged. Any other failure is logged with its
    stack trace and re-raised as DatabaseError, so clients get a generic 500
    and the details stay in the logs. The session itself is committed or
    rolled back by get_db_session once the route returns.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from partner_api.exceptions import DatabaseError, NotFoundError, PartnerAPIError
from partner_api.models import Partner, ServiceOffer
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
from partner_api.services.upload_service import upload_url

logger = logging.getLogger(__name__)

# Upload field name → Partner column
MEDIA_FIELDS = ("logo", "marketplace_cover", "company_cover")

MAX_PARTNER_ID = 2**31 - 1


def media_url(filename: Optional[str]) -> Optional[str]:
    if not filename:
        return None
    return upload_url(filename)


def to_partner_response(partner: Partner) -> PartnerResponse:
    return PartnerResponse(
        id=partner.id,
        name=partner.name,
        description=partner.description,
        logo=media_url(partner.logo),
        marketplace_cover=media_url(partner.marketplace_cover),
        company_cover=media_url(partner.company_cover),
        about=partner.about,
        important_information=partner.important_information,
        created_at=partner.created_at,
        updated_at=partner.updated_at,
    )


def parse_partner_id(partner_id: str) -> Optional[int]:
    """Integer id from a path parameter, or None if it cannot be one."""
    raw = str(partner_id).strip()
    # Plain ASCII digits only; int() would also take "1_0", "+5" and "٣"
    if not (raw.isascii() and raw.isdigit()):
        return None
    pk = int(raw)
    # partners.id is a 32-bit INTEGER column
    if pk < 1 or pk > MAX_PARTNER_ID:
        return None
    return pk


class PartnerService(PartnerHandler):
    """
    Partner CRUD on a request-scoped AsyncSession.

    Query plans:
        list:   SELECT id, name, description FROM partners ORDER BY id
        get:    SELECT ... FROM partners WHERE id = :id          (primary key)
                SELECT ... FROM service_offers WHERE partner_id = :id
                ORDER BY term_months, title                     (idx_service_offers_partner_id)
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load_partner(self, partner_id: str) -> Partner:
        """
        Raises:
            NotFoundError when the id is not an integer or has no row.
        """
        pk = parse_partner_id(partner_id)
        if pk is None:
            raise NotFoundError(resource="partner", resource_id=str(partner_id))

        result = await self.db.execute(select(Partner).where(Partner.id == pk))
        partner = result.scalar_one_or_none()
        if partner is None:
            raise NotFoundError(resource="partner", resource_id=str(partner_id))
        return partner

    async def create_partner(self, payload: PartnerCreate) -> PartnerResponse:
        try:
            partner = Partner(name=payload.name, description=payload.description)
            self.db.add(partner)
            await self.db.flush()  # Assigns the id without committing
            logger.info("Partner created: id=%s name=%s", partner.id, partner.name)
            return to_partner_response(partner)
        except Exception as e:
            logger.error("Database error creating partner: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the partner. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_partners(self) -> List[PartnerSummary]:
        try:
            result = await self.db.execute(select(Partner).order_by(asc(Partner.id)))
            return [PartnerSummary.model_validate(p) for p in result.scalars().all()]
        except Exception as e:
            logger.error("Database error listing partners: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve partners. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_partner_with_offers(self, partner_id: str) -> PartnerWithOffersResponse:
        try:
            partner = await self._load_partner(partner_id)

            result = await self.db.execute(
                select(ServiceOffer)
                .where(ServiceOffer.partner_id == partner.id)
                .order_by(asc(ServiceOffer.term_months), asc(ServiceOffer.title))
            )
            offers = [ServiceOfferResponse.model_validate(o) for o in result.scalars().all()]

            return PartnerWithOffersResponse(
                partner=to_partner_response(partner),
                service_offers=offers,
            )
        except PartnerAPIError:
            raise
        except Exception as e:
            logger.error("Database error fetching partner %s: %s", partner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the partner. Please try again.",
                context={"partner_id": str(partner_id), "error_type": type(e).__name__},
            )

    async def update_partner(
        self,
        partner_id: str,
        fields: PartnerUpdate,
        files: Dict[str, StoredUpload],
    ) -> PartnerResponse:
        try:
            partner = await self._load_partner(partner_id)

            # Only what the client sent
            for name, value in fields.model_dump(exclude_none=True).items():
                setattr(partner, name, value)

            for name in MEDIA_FIELDS:
                stored = files.get(name)
                if stored is not None:
                    setattr(partner, name, stored.filename)

            partner.updated_at = datetime.now(timezone.utc)
            await self.db.flush()

            logger.info(
                "Partner %s updated: fields=%s files=%s",
                partner.id,
                sorted(fields.model_dump(exclude_none=True)),
                sorted(files),
            )
            return to_partner_response(partner)
        except PartnerAPIError:
            raise
        except Exception as e:
            logger.error("Database error updating partner %s: %s", partner_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the partner. Please try again.",
                context={"partner_id": str(partner_id), "error_type": type(e).__name__},
            )
