"""Invite code use cases."""

from portal.application.usecase.invite_code.generate import (
    GenerateInviteCodeRequest,
    GenerateInviteCodeResponse,
    GenerateInviteCodeUseCase,
)
from portal.application.usecase.invite_code.list_codes import (
    InviteCodeItem,
    ListInviteCodesRequest,
    ListInviteCodesResponse,
    ListInviteCodesUseCase,
)
from portal.application.usecase.invite_code.redeem import (
    RedeemInviteCodeRequest,
    RedeemInviteCodeResponse,
    RedeemInviteCodeUseCase,
)
from portal.application.usecase.invite_code.validate import (
    ValidateInviteCodeRequest,
    ValidateInviteCodeResponse,
    ValidateInviteCodeUseCase,
)

__all__ = [
    "GenerateInviteCodeRequest",
    "GenerateInviteCodeResponse",
    "GenerateInviteCodeUseCase",
    "InviteCodeItem",
    "ListInviteCodesRequest",
    "ListInviteCodesResponse",
    "ListInviteCodesUseCase",
    "RedeemInviteCodeRequest",
    "RedeemInviteCodeResponse",
    "RedeemInviteCodeUseCase",
    "ValidateInviteCodeRequest",
    "ValidateInviteCodeResponse",
    "ValidateInviteCodeUseCase",
]
