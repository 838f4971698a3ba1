"""Invite code record.

Invite codes gate account registration. Each code is redeemed at most
once; the store's unique constraint on the code and its conditional
update are the final arbiters.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from portal.domain.model.common import DomainModel
from portal.domain.value import InviteCode, InviteCodeId


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InviteCodeRecord(DomainModel):
    """Invite code entity.

    Business rules:
    - code is 6 characters of A-Z/0-9 and unique across all records
    - is_used only ever goes from False to True
    - a used code always has used_at and used_by_email
    """

    id: Optional[InviteCodeId] = None  # Assigned by the store
    code: InviteCode
    created_at: datetime = Field(default_factory=utc_now)
    created_by: Optional[str] = None  # Email of the issuing user
    is_used: bool = False
    used_at: Optional[datetime] = None
    used_by_email: Optional[str] = None

    @model_validator(mode="after")
    def check_usage_fields(self) -> "InviteCodeRecord":
        """A used code must record when and by whom."""
        if self.is_used and (self.used_at is None or self.used_by_email is None):
            raise ValueError("Used invite codes require used_at and used_by_email")
        return self
