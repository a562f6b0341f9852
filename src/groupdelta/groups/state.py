# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Group snapshots.

A snapshot is the full, already-decrypted state of a group at one revision:
its attributes, access control and the four membership collections
(active members, pending invites, join requests, bans). Snapshots are
immutable; every collection is held as a tuple in the order it was given.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any

from ..core.exceptions import DuplicateKeyError, InvalidSnapshotError
from ..core.ordered import index_by
from .types import AccessRequired, MemberRole

MAX_REVISION = 2**32 - 1


def encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode() if value else ""


def decode_bytes(value: str | None) -> bytes:
    return base64.b64decode(value) if value else b""


# =============================================================================
# MEMBERSHIP RECORDS
# =============================================================================


@dataclass(frozen=True)
class Member:
    """An active member of a group.

    Attributes:
        identity: Opaque identifier, unique among the group's members.
        role: Member role.
        profile_key: Opaque profile key; only ever compared for equality.
        presentation: Opaque credential presentation, informational only.
    """

    identity: bytes
    role: MemberRole = MemberRole.DEFAULT
    profile_key: bytes = b""
    presentation: bytes = b""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "identity": encode_bytes(self.identity),
            "role": self.role.value,
            "profile_key": encode_bytes(self.profile_key),
            "presentation": encode_bytes(self.presentation),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Member:
        """Create from dictionary."""
        return cls(
            identity=decode_bytes(data["identity"]),
            role=MemberRole(data.get("role", "default")),
            profile_key=decode_bytes(data.get("profile_key")),
            presentation=decode_bytes(data.get("presentation")),
        )


@dataclass(frozen=True)
class PendingMember:
    """An identity invited to the group that has not accepted yet."""

    identity: bytes
    identity_ciphertext: bytes = b""  # Binds the invite to the invitee
    added_by: bytes = b""
    timestamp: int = 0  # Epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity": encode_bytes(self.identity),
            "identity_ciphertext": encode_bytes(self.identity_ciphertext),
            "added_by": encode_bytes(self.added_by),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PendingMember:
        return cls(
            identity=decode_bytes(data["identity"]),
            identity_ciphertext=decode_bytes(data.get("identity_ciphertext")),
            added_by=decode_bytes(data.get("added_by")),
            timestamp=data.get("timestamp", 0),
        )


@dataclass(frozen=True)
class RequestingMember:
    """An identity that asked to join and awaits administrator approval."""

    identity: bytes
    profile_key: bytes = b""
    timestamp: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity": encode_bytes(self.identity),
            "profile_key": encode_bytes(self.profile_key),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RequestingMember:
        return cls(
            identity=decode_bytes(data["identity"]),
            profile_key=decode_bytes(data.get("profile_key")),
            timestamp=data.get("timestamp", 0),
        )


@dataclass(frozen=True)
class BannedMember:
    """An identity barred from joining.

    ``timestamp`` is None when the time of the ban is not known; it is
    never replaced by a made-up value.
    """

    identity: bytes
    timestamp: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"identity": encode_bytes(self.identity)}
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BannedMember:
        return cls(
            identity=decode_bytes(data["identity"]),
            timestamp=data.get("timestamp"),
        )


# =============================================================================
# ACCESS CONTROL
# =============================================================================


@dataclass(frozen=True)
class AccessControl:
    """Permission levels for the three categories of group change."""

    attributes: AccessRequired = AccessRequired.MEMBER
    members: AccessRequired = AccessRequired.MEMBER
    add_from_invite_link: AccessRequired = AccessRequired.UNSATISFIABLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "attributes": self.attributes.value,
            "members": self.members.value,
            "add_from_invite_link": self.add_from_invite_link.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccessControl:
        return cls(
            attributes=AccessRequired(data.get("attributes", "member")),
            members=AccessRequired(data.get("members", "member")),
            add_from_invite_link=AccessRequired(data.get("add_from_invite_link", "unsatisfiable")),
        )


# =============================================================================
# GROUP SNAPSHOT
# =============================================================================


@dataclass(frozen=True)
class GroupSnapshot:
    """Complete state of a group at one revision.

    Collections are converted to tuples on construction so a snapshot can be
    shared freely between concurrent reconciliations.
    """

    revision: int = 0

    # Attributes
    title: str = ""
    description: str = ""
    avatar: str = ""
    disappearing_messages_timer: int = 0  # Seconds, 0 = off
    is_announcement_group: bool = False

    access_control: AccessControl = field(default_factory=AccessControl)
    invite_link_password: bytes = b""

    # Membership
    members: tuple[Member, ...] = ()
    pending_members: tuple[PendingMember, ...] = ()
    requesting_members: tuple[RequestingMember, ...] = ()
    banned_members: tuple[BannedMember, ...] = ()

    def __post_init__(self) -> None:
        for name in ("members", "pending_members", "requesting_members", "banned_members"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-safe dictionary."""
        return {
            "revision": self.revision,
            "title": self.title,
            "description": self.description,
            "avatar": self.avatar,
            "disappearing_messages_timer": self.disappearing_messages_timer,
            "is_announcement_group": self.is_announcement_group,
            "access_control": self.access_control.to_dict(),
            "invite_link_password": encode_bytes(self.invite_link_password),
            "members": [m.to_dict() for m in self.members],
            "pending_members": [m.to_dict() for m in self.pending_members],
            "requesting_members": [m.to_dict() for m in self.requesting_members],
            "banned_members": [m.to_dict() for m in self.banned_members],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GroupSnapshot:
        """Create from dictionary."""
        return cls(
            revision=data.get("revision", 0),
            title=data.get("title", ""),
            description=data.get("description", ""),
            avatar=data.get("avatar", ""),
            disappearing_messages_timer=data.get("disappearing_messages_timer", 0),
            is_announcement_group=data.get("is_announcement_group", False),
            access_control=AccessControl.from_dict(data.get("access_control", {})),
            invite_link_password=decode_bytes(data.get("invite_link_password")),
            members=tuple(Member.from_dict(m) for m in data.get("members", [])),
            pending_members=tuple(PendingMember.from_dict(m) for m in data.get("pending_members", [])),
            requesting_members=tuple(RequestingMember.from_dict(m) for m in data.get("requesting_members", [])),
            banned_members=tuple(BannedMember.from_dict(m) for m in data.get("banned_members", [])),
        )


# =============================================================================
# VALIDATION
# =============================================================================


def validate_snapshot(snapshot: GroupSnapshot, name: str = "snapshot") -> None:
    """Check the well-formedness invariants of a snapshot.

    Identities must be unique within ``members`` and, independently, within
    each of ``pending_members``, ``requesting_members`` and ``banned_members``.
    The same identity appearing in two different collections is allowed.

    Args:
        snapshot: Snapshot to check.
        name: Label for the snapshot in error details, e.g. "from" or "to".

    Raises:
        InvalidSnapshotError: On the first violation found.
    """
    if not 0 <= snapshot.revision <= MAX_REVISION:
        raise InvalidSnapshotError(
            f"Revision out of range in {name} snapshot: {snapshot.revision}",
            collection="revision",
            snapshot=name,
        )

    collections = {
        "members": snapshot.members,
        "pending_members": snapshot.pending_members,
        "requesting_members": snapshot.requesting_members,
        "banned_members": snapshot.banned_members,
    }
    for collection, records in collections.items():
        try:
            index_by(records, lambda record: record.identity)
        except DuplicateKeyError as e:
            raise InvalidSnapshotError(
                f"Duplicate identity {e.key.hex()} in {name}.{collection}",
                collection=collection,
                identity=e.key,
                snapshot=name,
            ) from e
