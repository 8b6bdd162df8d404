"""Initial schema: accounts, account_sessions, signals, fics, fic_url_cache.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "account_sessions",
        sa.Column("token", sa.LargeBinary(16), primary_key=True),
        sa.Column("account_id", sa.Integer, sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_account_sessions_account_id", "account_sessions", ["account_id"])

    op.create_table(
        "signals",
        sa.Column("account_id", sa.Integer, sa.ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("url", sa.String(2048), primary_key=True),
        sa.Column("tag", sa.String(200), primary_key=True),
        sa.Column("sign", sa.Boolean, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_signals_url", "signals", ["url"])
    op.create_index("ix_signals_tag", "signals", ["tag"])

    op.create_table(
        "fics",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("source_url", sa.Text, nullable=False),
        sa.Column("title", sa.Text, nullable=False),
    )

    op.create_table(
        "fic_url_cache",
        sa.Column("url", sa.String(2048), primary_key=True),
        sa.Column("fic_id", sa.String(64), sa.ForeignKey("fics.id"), nullable=False),
        sa.Column("fetched_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_fic_url_cache_fic_id", "fic_url_cache", ["fic_id"])


def downgrade() -> None:
    op.drop_table("fic_url_cache")
    op.drop_table("fics")
    op.drop_table("signals")
    op.drop_table("account_sessions")
    op.drop_table("accounts")
