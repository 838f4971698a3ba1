"""SQLAlchemy table definitions.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Identity,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# INVITE CODES TABLE
# ============================================================================
invite_codes_table = Table(
    "invite_codes",
    metadata,
    Column("id", BigInteger, Identity(always=False), primary_key=True),
    Column("code", String(6), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("created_by", String(255), nullable=True),  # Issuer email
    Column("is_used", Boolean, nullable=False, server_default="false"),
    Column("used_at", TIMESTAMP(timezone=True), nullable=True),
    Column("used_by_email", String(255), nullable=True),
    CheckConstraint("code ~ '^[A-Z0-9]{6}$'", name="invite_codes_code_format"),
)

Index("idx_invite_codes_is_used", invite_codes_table.c.is_used)
Index(
    "idx_invite_codes_created_by",
    invite_codes_table.c.created_by,
    invite_codes_table.c.created_at.desc(),
)

# ============================================================================
# PROFILES TABLE (owned by the primary application, read-only here)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID(as_uuid=False), primary_key=True),
    Column("username", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
)
