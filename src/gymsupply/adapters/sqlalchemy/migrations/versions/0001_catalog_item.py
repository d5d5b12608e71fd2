"""Create the catalog_item table.

Revision ID: 0001_catalog_item
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from gymsupply.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001_catalog_item"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "catalog_item",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("collection", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("part_number", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("brand", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("cost", sa.String(), nullable=True),
        sa.Column("preferred", sa.String(), nullable=True),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("extras", sa.JSON(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_catalog_item")),
    )
    op.create_index(
        "ix_catalog_item_collection_part_number",
        "catalog_item",
        ["collection", "part_number"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_catalog_item_collection_part_number", table_name="catalog_item")
    op.drop_table("catalog_item")
