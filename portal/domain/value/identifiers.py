"""Strongly typed identifiers.

Subject ids are opaque strings issued by the identity provider; invite
code records are keyed by a store-assigned integer.
"""

from typing import NewType

SubjectId = NewType("SubjectId", str)
InviteCodeId = NewType("InviteCodeId", int)
