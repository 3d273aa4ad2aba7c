"""Create foods and notes tables

Revision ID: 001
Revises: None
Create Date: 2025-01-15 00:00:00.000000+00:00

What:  Creates `foods` and `notes`: typed columns for the fields the API
       filters on, plus a JSONB `extra` column for every other field.
How:   expiry_date / added_date use the "C" collation so text comparison is
       byte order, which is ISO-8601 chronological order.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "foods",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("food_title", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("user_email", sa.Text(), nullable=True),
        sa.Column("expiry_date", sa.Text(collation="C"), nullable=True),
        sa.Column("added_date", sa.Text(collation="C"), nullable=True),
        sa.Column(
            "extra",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_foods_category", "foods", ["category"])
    op.create_index("idx_foods_user_email", "foods", ["user_email"])
    op.create_index("idx_foods_expiry_date", "foods", ["expiry_date"])

    # food_id is a plain string: no foreign key, notes outlive their food
    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("food_id", sa.Text(), nullable=True),
        sa.Column("added_date", sa.Text(collation="C"), nullable=True),
        sa.Column(
            "extra",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_food_id", "notes", ["food_id"])


def downgrade() -> None:
    op.drop_index("idx_notes_food_id", table_name="notes")
    op.drop_table("notes")
    op.drop_index("idx_foods_expiry_date", table_name="foods")
    op.drop_index("idx_foods_user_email", table_name="foods")
    op.drop_index("idx_foods_category", table_name="foods")
    op.drop_table("foods")
