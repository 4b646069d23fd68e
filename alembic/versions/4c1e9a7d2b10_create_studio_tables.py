"""Create studio and collection tables.

Revision ID: 4c1e9a7d2b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c1e9a7d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "studios",
        sa.Column("studio_id", sa.String(length=26), primary_key=True),
        sa.Column("slug", sa.String(length=64), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_studios_slug", "studios", ["slug"], unique=True)

    op.create_table(
        "studio_collections",
        sa.Column("collection_id", sa.String(length=26), primary_key=True),
        sa.Column(
            "studio_id",
            sa.String(length=26),
            sa.ForeignKey("studios.studio_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=32), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("studio_id", "name", name="uq_studio_collection_name"),
    )


def downgrade() -> None:
    op.drop_table("studio_collections")
    op.drop_index("ix_studios_slug", table_name="studios")
    op.drop_table("studios")
