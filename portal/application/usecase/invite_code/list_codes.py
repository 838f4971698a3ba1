"""List invite codes use case."""

from datetime import datetime

from pydantic import Field

from portal.application.usecase.base import BaseUseCase, CamelModel
from portal.domain.model import InviteCodeRecord
from portal.domain.service import InviteCodeService


class InviteCodeItem(CamelModel):
    """Invite code item in response."""

    id: int | None = None
    code: str
    created_at: datetime
    created_by: str | None = None
    is_used: bool
    used_at: datetime | None = None
    used_by_email: str | None = None

    @classmethod
    def from_record(cls, record: InviteCodeRecord) -> "InviteCodeItem":
        return cls(
            id=record.id,
            code=record.code.root,
            created_at=record.created_at,
            created_by=record.created_by,
            is_used=record.is_used,
            used_at=record.used_at,
            used_by_email=record.used_by_email,
        )


class ListInviteCodesRequest(CamelModel):
    created_by: str
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListInviteCodesResponse(CamelModel):
    success: bool = True
    invite_codes: list[InviteCodeItem]


class ListInviteCodesUseCase(BaseUseCase):
    """Use case for listing the codes a user has issued."""

    def __init__(self, invite_code_service: InviteCodeService) -> None:
        self.invite_code_service = invite_code_service

    async def execute(self, request: ListInviteCodesRequest) -> ListInviteCodesResponse:
        """Return the caller's codes, newest first."""
        records = await self.invite_code_service.list_codes(
            created_by=request.created_by,
            limit=request.limit,
            offset=request.offset,
        )
        return ListInviteCodesResponse(
            invite_codes=[InviteCodeItem.from_record(r) for r in records]
        )
