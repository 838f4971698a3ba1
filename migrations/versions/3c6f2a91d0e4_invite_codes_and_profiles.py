"""invite_codes_and_profiles

Create the schema for cross-domain auth and invite codes:
- Invite codes (single-use, 6 characters A-Z/0-9, unique)
- Profiles (username/avatar read when enriching user info)

Revision ID: 3c6f2a91d0e4
Revises:
Create Date: 2026-10-18 09:12:44.381520

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c6f2a91d0e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "invite_codes",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=False), nullable=False),
        sa.Column("code", sa.String(length=6), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("created_by", sa.String(length=255), nullable=True),
        sa.Column(
            "is_used", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("used_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("used_by_email", sa.String(length=255), nullable=True),
        sa.CheckConstraint("code ~ '^[A-Z0-9]{6}$'", name="invite_codes_code_format"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("idx_invite_codes_is_used", "invite_codes", ["is_used"])
    op.create_index(
        "idx_invite_codes_created_by",
        "invite_codes",
        ["created_by", sa.text("created_at DESC")],
    )

    # Owned by the primary application; only created when missing
    op.execute("""
        CREATE TABLE IF NOT EXISTS profiles (
            id UUID PRIMARY KEY,
            username VARCHAR(255),
            avatar_url TEXT
        )
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_invite_codes_created_by", table_name="invite_codes")
    op.drop_index("idx_invite_codes_is_used", table_name="invite_codes")
    op.drop_table("invite_codes")
