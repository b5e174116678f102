"""
Partner API - Partner Request/Response Schemas
===============================================

What:  Pydantic models for the /partners endpoints.
How:   FastAPI validates request bodies against the *Create/*Update models and
       serializes handler results through the *Response models, which also
       drive the generated OpenAPI document.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PartnerCreate(BaseModel):
    """Body of POST /partners."""
    name: str = Field(description="Partner display name", examples=["Rhythm Energy"])
    description: str = Field(description="Short description", examples=["Energy provider"])


class PartnerUpdate(BaseModel):
    """
    Text fields of PATCH /partners/{id}.

    Both fields are optional; a field that was not sent leaves the stored
    value untouched. Media files travel separately as StoredUpload references.
    """
    about: Optional[str] = Field(default=None, description="About information for the partner")
    important_information: Optional[str] = Field(
        default=None,
        description="Important information about the partner",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PartnerSummary(BaseModel):
    """Item of GET /partners."""
    id: int = Field(examples=[1])
    name: str = Field(examples=["Rhythm Energy"])
    description: str = Field(examples=["Energy provider"])

    model_config = {"from_attributes": True}


class PartnerResponse(BaseModel):
    """
    Full partner representation.

    Media fields are URL paths under the upload prefix
    (e.g. /uploads/logo-1718000000000-42-logo.png), or null when unset.
    """
    id: int = Field(examples=[1])
    name: str = Field(examples=["Rhythm Energy"])
    description: str = Field(examples=["Energy provider"])
    logo: Optional[str] = Field(default=None, description="Logo URL")
    marketplace_cover: Optional[str] = Field(default=None, description="Marketplace cover URL")
    company_cover: Optional[str] = Field(default=None, description="Company cover URL")
    about: Optional[str] = None
    important_information: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceOfferResponse(BaseModel):
    """A service offer attached to a partner."""
    uuid: str = Field(examples=["abc123-uuid"])
    partner_id: int = Field(examples=[1])
    title: str = Field(examples=["12-Month Plan"])
    term_months: int = Field(examples=[12])
    rhythm_kwh_rate: float = Field(examples=[0.11])
    price_1000_kwh: float = Field(examples=[110.00])
    renewable_energy: bool = Field(examples=[True])
    description_en: str = Field(examples=["Affordable renewable energy plan."])

    model_config = {"from_attributes": True}


class PartnerWithOffersResponse(BaseModel):
    """
    Body of GET /partners/{id}.

    Serialized as {"partner": {...}, "serviceOffers": [...]}; FastAPI renders
    response models by alias.
    """
    partner: PartnerResponse
    service_offers: List[ServiceOfferResponse] = Field(
        default_factory=list,
        alias="serviceOffers",
    )

    model_config = {"populate_by_name": True}


class PartnerUpdateResponse(BaseModel):
    """Body of PATCH /partners/{id}."""
    message: str = Field(default="Partner updated successfully")
    partner: PartnerResponse
