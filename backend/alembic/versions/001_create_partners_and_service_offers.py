"""Create partners and service_offers tables

Revision ID: 001
Revises: None
Create Date: 2024-06-10 00:00:00.000000+00:00

What:  Initial schema: partners and the service offers attached to them.
Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "partners",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        # Generated filenames inside the upload directory
        sa.Column("logo", sa.String(512), nullable=True),
        sa.Column("marketplace_cover", sa.String(512), nullable=True),
        sa.Column("company_cover", sa.String(512), nullable=True),
        sa.Column("about", sa.Text(), nullable=True),
        sa.Column("important_information", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "service_offers",
        sa.Column("uuid", sa.String(36), nullable=False),
        sa.Column("partner_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("term_months", sa.Integer(), nullable=False),
        sa.Column("rhythm_kwh_rate", sa.Numeric(10, 4), nullable=False),
        sa.Column("price_1000_kwh", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "renewable_energy",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column("description_en", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.ForeignKeyConstraint(["partner_id"], ["partners.id"]),
        sa.PrimaryKeyConstraint("uuid"),
    )

    op.create_index("idx_service_offers_partner_id", "service_offers", ["partner_id"])


def downgrade() -> None:
    op.drop_index("idx_service_offers_partner_id", table_name="service_offers")
    op.drop_table("service_offers")
    op.drop_table("partners")
