# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Group change records.

A GroupChange is sparse: besides ``revision``, each field is only present
when that category of change happened. Scalar fields use None for
"unchanged" and collection fields use an empty tuple.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from .state import (
    BannedMember,
    Member,
    PendingMember,
    RequestingMember,
    decode_bytes,
    encode_bytes,
)
from .types import AccessRequired, MemberRole

# =============================================================================
# CHANGE ENTRIES
# =============================================================================


@dataclass(frozen=True)
class ModifyMemberRole:
    """A member that stayed in the group but changed role."""

    identity: bytes
    role: MemberRole

    def to_dict(self) -> dict[str, Any]:
        return {"identity": encode_bytes(self.identity), "role": self.role.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModifyMemberRole:
        return cls(identity=decode_bytes(data["identity"]), role=MemberRole(data["role"]))


@dataclass(frozen=True)
class ApproveMember:
    """A join request that was approved, with the role granted."""

    identity: bytes
    role: MemberRole

    def to_dict(self) -> dict[str, Any]:
        return {"identity": encode_bytes(self.identity), "role": self.role.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ApproveMember:
        return cls(identity=decode_bytes(data["identity"]), role=MemberRole(data["role"]))


@dataclass(frozen=True)
class PendingMemberRemoval:
    """A withdrawn invite.

    Carries the ciphertext of the original invite so a recipient can find
    and discard the matching pending record.
    """

    identity: bytes
    identity_ciphertext: bytes

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity": encode_bytes(self.identity),
            "identity_ciphertext": encode_bytes(self.identity_ciphertext),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PendingMemberRemoval:
        return cls(
            identity=decode_bytes(data["identity"]),
            identity_ciphertext=decode_bytes(data.get("identity_ciphertext")),
        )


# =============================================================================
# GROUP CHANGE
# =============================================================================

_SCALAR_FIELDS = {
    "new_title": None,
    "new_description": None,
    "new_avatar": None,
    "new_timer": None,
    "new_is_announcement_group": None,
    "new_attribute_access": AccessRequired,
    "new_member_access": AccessRequired,
    "new_invite_link_access": AccessRequired,
    "new_invite_link_password": bytes,
}

_IDENTITY_LIST_FIELDS = ("delete_members", "delete_requesting_members")

_RECORD_LIST_FIELDS = {
    "new_members": Member,
    "promote_pending_members": Member,
    "promote_requesting_members": ApproveMember,
    "delete_pending_members": PendingMemberRemoval,
    "new_pending_members": PendingMember,
    "new_requesting_members": RequestingMember,
    "modify_member_roles": ModifyMemberRole,
    "modified_profile_keys": Member,
    "delete_banned_members": BannedMember,
    "new_banned_members": BannedMember,
}


@dataclass(frozen=True)
class GroupChange:
    """The change that takes a group from one revision to the next.

    Attributes:
        revision: Revision the change produces; always set.
        new_*: Replacement value of a group attribute, or None if unchanged.
        delete_members: Identities of members that left or were removed.
        new_members: Members added directly.
        promote_pending_members: Invitees that accepted, as their new member records.
        promote_requesting_members: Approved join requests.
        delete_pending_members: Invites withdrawn without being accepted.
        new_pending_members: New invites.
        delete_requesting_members: Identities of rejected or cancelled join requests.
        new_requesting_members: New join requests.
        modify_member_roles: Role changes of members present before and after.
        modified_profile_keys: New records of members whose profile key changed.
        delete_banned_members: Lifted bans (identity only).
        new_banned_members: New bans, with timestamp when known.
    """

    revision: int

    new_title: str | None = None
    new_description: str | None = None
    new_avatar: str | None = None
    new_timer: int | None = None
    new_is_announcement_group: bool | None = None
    new_attribute_access: AccessRequired | None = None
    new_member_access: AccessRequired | None = None
    new_invite_link_access: AccessRequired | None = None
    new_invite_link_password: bytes | None = None

    delete_members: tuple[bytes, ...] = ()
    new_members: tuple[Member, ...] = ()
    promote_pending_members: tuple[Member, ...] = ()
    promote_requesting_members: tuple[ApproveMember, ...] = ()
    delete_pending_members: tuple[PendingMemberRemoval, ...] = ()
    new_pending_members: tuple[PendingMember, ...] = ()
    delete_requesting_members: tuple[bytes, ...] = ()
    new_requesting_members: tuple[RequestingMember, ...] = ()
    modify_member_roles: tuple[ModifyMemberRole, ...] = ()
    modified_profile_keys: tuple[Member, ...] = ()
    delete_banned_members: tuple[BannedMember, ...] = ()
    new_banned_members: tuple[BannedMember, ...] = ()

    def changed_fields(self) -> list[str]:
        """Names of the optional fields that are set, in declaration order."""
        changed = []
        for f in fields(self):
            if f.name == "revision":
                continue
            value = getattr(self, f.name)
            if value is not None and value != ():
                changed.append(f.name)
        return changed

    def is_empty(self) -> bool:
        """True if the change carries nothing but its revision."""
        return not self.changed_fields()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a sparse, JSON-safe dictionary.

        Only ``revision`` and the fields that are set appear, in declaration
        order, so equal changes serialize to identical JSON.
        """
        data: dict[str, Any] = {"revision": self.revision}
        for name in self.changed_fields():
            value = getattr(self, name)
            if name in _IDENTITY_LIST_FIELDS:
                data[name] = [encode_bytes(identity) for identity in value]
            elif name in _RECORD_LIST_FIELDS:
                data[name] = [entry.to_dict() for entry in value]
            elif isinstance(value, AccessRequired):
                data[name] = value.value
            elif isinstance(value, bytes):
                data[name] = encode_bytes(value)
            else:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GroupChange:
        """Create from a dictionary produced by ``to_dict``."""
        kwargs: dict[str, Any] = {"revision": data["revision"]}
        for name, kind in _SCALAR_FIELDS.items():
            if name not in data:
                continue
            value = data[name]
            if kind is AccessRequired:
                value = AccessRequired(value)
            elif kind is bytes:
                value = decode_bytes(value)
            kwargs[name] = value
        for name in _IDENTITY_LIST_FIELDS:
            if name in data:
                kwargs[name] = tuple(decode_bytes(identity) for identity in data[name])
        for name, record_type in _RECORD_LIST_FIELDS.items():
            if name in data:
                kwargs[name] = tuple(record_type.from_dict(entry) for entry in data[name])
        return cls(**kwargs)
