"""
Partner API - ServiceOffer SQLAlchemy Model
============================================

What:  ORM model for the `service_offers` table: priced plans sold through a
       partner (e.g. a 12-month energy plan).
Who:   Read by PartnerService when building GET /partners/{id}. Offers are
       managed outside this API; there is no write path here.

Query Pattern:
    SELECT ... FROM service_offers WHERE partner_id = :id ORDER BY term_months, title
    → served by idx_service_offers_partner_id
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from partner_api.database import Base


class ServiceOffer(Base):
    """A plan offered by exactly one partner."""

    __tablename__ = "service_offers"

    # String UUID keeps the column portable between PostgreSQL and SQLite
    uuid: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    partner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("partners.id"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    term_months: Mapped[int] = mapped_column(Integer, nullable=False)

    # Rates come back as floats (asdecimal=False) to match the JSON contract
    rhythm_kwh_rate: Mapped[float] = mapped_column(
        Numeric(10, 4, asdecimal=False), nullable=False
    )
    price_1000_kwh: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=False
    )

    renewable_energy: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description_en: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        Index("idx_service_offers_partner_id", "partner_id"),
    )

    def __repr__(self) -> str:
        return f"<ServiceOffer(uuid={self.uuid}, partner_id={self.partner_id}, title='{self.title}')>"
