"""Create lead_pools, leads and lead_products tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "lead_pools",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("campaign_id", sa.String(36), nullable=False),
        sa.Column("created_by_id", sa.String(36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["campaign_id"], ["campaigns.id"]),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_lead_pools_campaign_id"), "lead_pools", ["campaign_id"])

    op.create_table(
        "leads",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("phone_number", sa.String(), nullable=False),
        sa.Column("sector_id", sa.String(36), nullable=True),
        sa.Column("campaign_id", sa.String(36), nullable=True),
        sa.Column("assigned_to_id", sa.String(36), nullable=True),
        sa.Column("lead_pool_id", sa.String(36), nullable=True),
        sa.Column("first_level_disposition_id", sa.String(36), nullable=True),
        sa.Column("second_level_disposition_id", sa.String(36), nullable=True),
        sa.Column("third_level_disposition_id", sa.String(36), nullable=True),
        sa.Column("disposition_notes", sa.Text(), nullable=True),
        sa.Column("last_called_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["sector_id"], ["sectors.id"]),
        sa.ForeignKeyConstraint(["campaign_id"], ["campaigns.id"]),
        sa.ForeignKeyConstraint(["assigned_to_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["lead_pool_id"], ["lead_pools.id"]),
        sa.ForeignKeyConstraint(["first_level_disposition_id"], ["first_level_dispositions.id"]),
        sa.ForeignKeyConstraint(
            ["second_level_disposition_id"], ["second_level_dispositions.id"]
        ),
        sa.ForeignKeyConstraint(["third_level_disposition_id"], ["third_level_dispositions.id"]),
        sa.PrimaryKeyConstraint("id"),
        # A phone number identifies at most one lead system-wide
        sa.UniqueConstraint("phone_number", name="uq_leads_phone_number"),
    )
    op.create_index(op.f("ix_leads_campaign_id"), "leads", ["campaign_id"])
    op.create_index(op.f("ix_leads_assigned_to_id"), "leads", ["assigned_to_id"])
    op.create_index(op.f("ix_leads_lead_pool_id"), "leads", ["lead_pool_id"])

    op.create_table(
        "lead_products",
        sa.Column("lead_id", sa.String(36), nullable=False),
        sa.Column("product_id", sa.String(36), nullable=False),
        sa.ForeignKeyConstraint(["lead_id"], ["leads.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("lead_id", "product_id"),
    )


def downgrade() -> None:
    op.drop_table("lead_products")
    op.drop_index(op.f("ix_leads_lead_pool_id"), table_name="leads")
    op.drop_index(op.f("ix_leads_assigned_to_id"), table_name="leads")
    op.drop_index(op.f("ix_leads_campaign_id"), table_name="leads")
    op.drop_table("leads")
    op.drop_index(op.f("ix_lead_pools_campaign_id"), table_name="lead_pools")
    op.drop_table("lead_pools")
