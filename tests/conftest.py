"""Global test fixtures for the groupdelta test suite."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest

from groupdelta.core.config import clear_config_cache
from groupdelta.groups import (
    AccessControl,
    AccessRequired,
    GroupChange,
    GroupSnapshot,
    Member,
    MemberRole,
)

# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all GROUPDELTA_ environment variables and reset the config singleton."""
    for key in list(os.environ.keys()):
        if key.startswith("GROUPDELTA_"):
            monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


# ============================================================================
# Identity Fixtures
# ============================================================================


def _identity(label: str) -> bytes:
    """A 16-byte identity derived from a readable label."""
    return label.encode().ljust(16, b"\x00")


@pytest.fixture
def alice() -> bytes:
    return _identity("alice")


@pytest.fixture
def bob() -> bytes:
    return _identity("bob")


@pytest.fixture
def carol() -> bytes:
    return _identity("carol")


@pytest.fixture
def dave() -> bytes:
    return _identity("dave")


@pytest.fixture
def erin() -> bytes:
    return _identity("erin")


@pytest.fixture
def frank() -> bytes:
    return _identity("frank")


# ============================================================================
# Snapshot Fixtures
# ============================================================================


@pytest.fixture
def base_snapshot(alice, bob) -> GroupSnapshot:
    """A small group: alice administers, bob is a member, nothing pending."""
    return GroupSnapshot(
        revision=7,
        title="Climbing crew",
        description="Tuesday and Thursday sessions",
        avatar="avatars/crew.png",
        disappearing_messages_timer=0,
        is_announcement_group=False,
        access_control=AccessControl(
            attributes=AccessRequired.MEMBER,
            members=AccessRequired.MEMBER,
            add_from_invite_link=AccessRequired.UNSATISFIABLE,
        ),
        invite_link_password=b"",
        members=(
            Member(identity=alice, role=MemberRole.ADMINISTRATOR, profile_key=b"alice-key-1"),
            Member(identity=bob, role=MemberRole.DEFAULT, profile_key=b"bob-key-1"),
        ),
    )


# ============================================================================
# Apply operator (test only)
# ============================================================================


def _apply(snapshot: GroupSnapshot, change: GroupChange) -> GroupSnapshot:
    """Apply a change to a snapshot.

    Additions are appended, so membership order can differ from the snapshot
    the change was computed against; compare with ``canonical``.
    """
    requesting = {r.identity: r for r in snapshot.requesting_members}

    members = {m.identity: m for m in snapshot.members}
    for identity in change.delete_members:
        del members[identity]
    for modification in change.modify_member_roles:
        old = members[modification.identity]
        members[modification.identity] = Member(
            identity=old.identity,
            role=modification.role,
            profile_key=old.profile_key,
            presentation=old.presentation,
        )
    for member in change.modified_profile_keys:
        members[member.identity] = member
    for member in change.new_members + change.promote_pending_members:
        members[member.identity] = member
    for approval in change.promote_requesting_members:
        members[approval.identity] = Member(
            identity=approval.identity,
            role=approval.role,
            profile_key=requesting[approval.identity].profile_key,
        )

    removed_pending = {p.identity for p in change.delete_pending_members}
    removed_pending.update(m.identity for m in change.promote_pending_members)
    pending = [p for p in snapshot.pending_members if p.identity not in removed_pending]
    pending.extend(change.new_pending_members)

    removed_requesting = set(change.delete_requesting_members)
    removed_requesting.update(a.identity for a in change.promote_requesting_members)
    requesting_after = [r for r in snapshot.requesting_members if r.identity not in removed_requesting]
    requesting_after.extend(change.new_requesting_members)

    unbanned = {b.identity for b in change.delete_banned_members}
    banned = [b for b in snapshot.banned_members if b.identity not in unbanned]
    banned.extend(change.new_banned_members)

    def pick(new: Any, old: Any) -> Any:
        return old if new is None else new

    access = snapshot.access_control
    return GroupSnapshot(
        revision=change.revision,
        title=pick(change.new_title, snapshot.title),
        description=pick(change.new_description, snapshot.description),
        avatar=pick(change.new_avatar, snapshot.avatar),
        disappearing_messages_timer=pick(change.new_timer, snapshot.disappearing_messages_timer),
        is_announcement_group=pick(change.new_is_announcement_group, snapshot.is_announcement_group),
        access_control=AccessControl(
            attributes=pick(change.new_attribute_access, access.attributes),
            members=pick(change.new_member_access, access.members),
            add_from_invite_link=pick(change.new_invite_link_access, access.add_from_invite_link),
        ),
        invite_link_password=pick(change.new_invite_link_password, snapshot.invite_link_password),
        members=tuple(members.values()),
        pending_members=tuple(pending),
        requesting_members=tuple(requesting_after),
        banned_members=tuple(banned),
    )


def _canonical(snapshot: GroupSnapshot) -> dict[str, Any]:
    """Snapshot as a dict with every membership collection keyed by identity."""
    data = snapshot.to_dict()
    for name in ("members", "pending_members", "requesting_members", "banned_members"):
        data[name] = {entry["identity"]: entry for entry in data[name]}
    return data


@pytest.fixture
def apply_change() -> Callable[[GroupSnapshot, GroupChange], GroupSnapshot]:
    return _apply


@pytest.fixture
def canonical() -> Callable[[GroupSnapshot], dict[str, Any]]:
    return _canonical

