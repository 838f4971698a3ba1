"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand.
"""

from typing import Any, Dict

from portal.domain.model import InviteCodeRecord, Profile
from portal.domain.value import InviteCode, InviteCodeId, SubjectId


def row_to_invite_code(row: Dict[str, Any]) -> InviteCodeRecord:
    """Convert database row to InviteCodeRecord domain model.

    Args:
        row: Database row as dict

    Returns:
        InviteCodeRecord domain model
    """
    return InviteCodeRecord(
        id=InviteCodeId(row["id"]),
        code=InviteCode(row["code"]),
        created_at=row["created_at"],
        created_by=row.get("created_by"),
        is_used=row["is_used"],
        used_at=row.get("used_at"),
        used_by_email=row.get("used_by_email"),
    )


def invite_code_to_dict(record: InviteCodeRecord) -> Dict[str, Any]:
    """Convert InviteCodeRecord to a dict for insertion.

    The id is left out so the store assigns it.
    """
    return {
        "code": record.code.root,
        "created_at": record.created_at,
        "created_by": record.created_by,
        "is_used": record.is_used,
        "used_at": record.used_at,
        "used_by_email": record.used_by_email,
    }


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        id=SubjectId(str(row["id"])),
        username=row.get("username"),
        avatar_url=row.get("avatar_url"),
    )
