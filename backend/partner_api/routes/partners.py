"""
Partner API - Partner Route Handlers
=====================================

What:  The /partners resource: create, list, fetch with service offers, and
       update with media uploads.
How:   Each handler extracts request data and delegates to the injected
       PartnerHandler. The {partner_id} path parameter is passed through as a
       string; interpreting it is the handler's job.
Who:   Called by the marketplace frontend and the partner admin screens.

Request Flow (PATCH /partners/{id}):
    1. partner_media_upload parses the multipart body
    2. File fields are checked (logo, marketplace_cover, company_cover; 1 each)
       and a violation is answered with 400 before anything else runs
    3. Accepted files are written to the upload directory under generated names
    4. The handler receives the id, the text fields and the stored file references
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from partner_api.dependencies import get_partner_handler
from partner_api.schemas.common import ErrorResponse
from partner_api.schemas.partner import (
    PartnerCreate,
    PartnerResponse,
    PartnerSummary,
    PartnerUpdate,
    PartnerUpdateResponse,
    PartnerWithOffersResponse,
)
from partner_api.services.multipart import IngestedForm, MultipartIngestion, UploadField
from partner_api.services.partner_handler import PartnerHandler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/partners", tags=["Partners"])

# ── Multipart Ingestion for Partner Media ─────────────────────────────────
MEDIA_UPLOAD_FIELDS = [
    UploadField("logo", max_count=1),
    UploadField("marketplace_cover", max_count=1),
    UploadField("company_cover", max_count=1),
]
TEXT_FIELDS = ["about", "important_information"]

partner_media_upload = MultipartIngestion(files=MEDIA_UPLOAD_FIELDS, text_fields=TEXT_FIELDS)

# Documents the multipart body, which FastAPI cannot infer from a Request-based dependency
UPDATE_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "logo": {
                            "type": "string",
                            "format": "binary",
                            "description": "Logo file for the partner",
                        },
                        "marketplace_cover": {
                            "type": "string",
                            "format": "binary",
                            "description": "Marketplace cover image file",
                        },
                        "company_cover": {
                            "type": "string",
                            "format": "binary",
                            "description": "Company cover image file",
                        },
                        "about": {
                            "type": "string",
                            "description": "About information for the partner",
                        },
                        "important_information": {
                            "type": "string",
                            "description": "Important information about the partner",
                        },
                    },
                }
            }
        },
    }
}


@router.post(
    "",
    status_code=201,
    response_model=PartnerResponse,
    responses={
        201: {"description": "Partner added successfully", "model": PartnerResponse},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
    summary="Add a new partner",
)
async def create_partner(
    payload: PartnerCreate,
    handler: PartnerHandler = Depends(get_partner_handler),
) -> PartnerResponse:
    return await handler.create_partner(payload)


@router.get(
    "",
    response_model=List[PartnerSummary],
    responses={
        200: {"description": "List of all partners"},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
    summary="Get all partners",
)
async def list_partners(
    handler: PartnerHandler = Depends(get_partner_handler),
) -> List[PartnerSummary]:
    return await handler.list_partners()


@router.get(
    "/{partner_id}",
    response_model=PartnerWithOffersResponse,
    responses={
        200: {"description": "Partner details with service offers (if available)"},
        404: {"description": "Partner not found", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
    summary="Get partner by ID with service offers (if applicable)",
)
async def get_partner_with_offers(
    partner_id: str,
    handler: PartnerHandler = Depends(get_partner_handler),
) -> PartnerWithOffersResponse:
    """
    Args:
        partner_id: Numeric ID of the partner to retrieve, passed through as sent.
    """
    return await handler.get_partner_with_offers(partner_id)


@router.patch(
    "/{partner_id}",
    response_model=PartnerUpdateResponse,
    responses={
        200: {"description": "Partner updated successfully"},
        400: {"description": "Malformed upload", "model": ErrorResponse},
        404: {"description": "Partner not found", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse},
    },
    summary="Update partner details including file uploads",
    openapi_extra=UPDATE_REQUEST_BODY,
)
async def update_partner(
    partner_id: str,
    form: IngestedForm = Depends(partner_media_upload),
    handler: PartnerHandler = Depends(get_partner_handler),
) -> PartnerUpdateResponse:
    """
    Update a partner from a multipart body.

    Files have already been stored by the time this runs; they are not removed
    if the handler then fails (e.g. 404 for an unknown id).
    """
    fields = PartnerUpdate(**form.fields)
    files = form.single_files()
    logger.info(
        "Updating partner %s: text fields %s, media %s",
        partner_id,
        sorted(form.fields),
        sorted(files),
    )
    partner = await handler.update_partner(partner_id, fields, files)
    return PartnerUpdateResponse(partner=partner)
