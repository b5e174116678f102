"""
Partner API - Partner Handler Interface
========================================

What:  Abstract contract for the domain logic behind the /partners routes.
How:   Routes depend on this interface only. The concrete implementation
       (PartnerService, SQLAlchemy-backed) is provided by
       dependencies.get_partner_handler; tests swap in an in-memory fake
       through app.dependency_overrides.

Contract:
    - Persistence and response shaping belong to the handler.
    - Missing partners raise NotFoundError (→ 404).
    - Unexpected persistence failures raise DatabaseError (→ 500).
    - partner_id arrives exactly as it appeared in the URL path (a string);
      interpreting it is the handler's job.
"""

from abc import ABC, abstractmethod
from typing import Dict, List

from partner_api.schemas.partner import (
    PartnerCreate,
    PartnerResponse,
    PartnerSummary,
    PartnerUpdate,
    PartnerWithOffersResponse,
)
from partner_api.schemas.upload import StoredUpload


class PartnerHandler(ABC):
    """Domain operations over partners."""

    @abstractmethod
    async def create_partner(self, payload: PartnerCreate) -> PartnerResponse:
        """Persist a new partner and return its representation."""

    @abstractmethod
    async def list_partners(self) -> List[PartnerSummary]:
        """Return every partner as id/name/description."""

    @abstractmethod
    async def get_partner_with_offers(self, partner_id: str) -> PartnerWithOffersResponse:
        """
        Return a partner together with its service offers.

        Raises:
            NotFoundError: no partner matches `partner_id`
        """

    @abstractmethod
    async def update_partner(
        self,
        partner_id: str,
        fields: PartnerUpdate,
        files: Dict[str, StoredUpload],
    ) -> PartnerResponse:
        """
        Apply text fields and stored media files to a partner.

        Args:
            partner_id: Raw path parameter
            fields: Text fields; None means "not sent, leave unchanged"
            files: Field name (logo, marketplace_cover, company_cover) to the
                   file already written by the upload service

        Raises:
            NotFoundError: no partner matches `partner_id`
        """
