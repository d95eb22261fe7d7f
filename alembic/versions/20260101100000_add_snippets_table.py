"""Add snippets table (author-owned text, cascade-deleted with the author).

Revision ID: 20260101100000
Revises: 20260101000000
Create Date: 2026-01-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20260101100000"
down_revision: Union[str, None] = "20260101000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "snippets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f("ix_snippets_author_id"), "snippets", ["author_id"], unique=False)
    op.create_index(op.f("ix_snippets_created_at"), "snippets", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_snippets_created_at"), table_name="snippets")
    op.drop_index(op.f("ix_snippets_author_id"), table_name="snippets")
    op.drop_table("snippets")
