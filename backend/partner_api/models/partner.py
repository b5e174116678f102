"""
Partner API - Partner SQLAlchemy Model
=======================================

What:  ORM model for the `partners` table.
Who:   Read and written by PartnerService; tracked by Alembic.

Table Design:
    - Integer primary key: partners are addressed as /partners/{id}
    - Media columns (logo, marketplace_cover, company_cover) hold the generated
      filename inside the upload directory, not an absolute path, so rows stay
      valid when the directory moves between environments
    - about / important_information: free text shown on the partner page
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from partner_api.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Partner(Base):
    """
    A business partner listed in the marketplace.

    Lifecycle:
        1. Created by POST /partners with name and description only
        2. Enriched by PATCH /partners/{id} (media files and long-form text)
        3. Service offers reference it through service_offers.partner_id
    """

    __tablename__ = "partners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # ── Media (generated filenames in the upload directory) ───────────────
    logo: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    marketplace_cover: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    company_cover: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    # ── Long-form content ─────────────────────────────────────────────────
    about: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    important_information: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Partner(id={self.id}, name='{self.name}')>"
