# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Reconstruction of a group change from two snapshots.

Given the state of a group at two revisions of one linear history,
:func:`reconstruct` returns the single GroupChange that takes the first to
the second. Every collection in the result follows the order of the
snapshot sequence it is drawn from: removals in ``from_state`` order,
everything else in ``to_state`` order.
"""

from __future__ import annotations

import logging
from collections.abc import Set

from ..core.config import get_config
from ..core.ordered import identities_of, index_by, select
from .change import ApproveMember, GroupChange, ModifyMemberRole, PendingMemberRemoval
from .classification import classify_additions
from .state import BannedMember, GroupSnapshot, Member, validate_snapshot

logger = logging.getLogger(__name__)


def reconstruct(
    from_state: GroupSnapshot,
    to_state: GroupSnapshot,
    *,
    validate: bool | None = None,
) -> GroupChange:
    """Compute the change that transforms ``from_state`` into ``to_state``.

    Both snapshots must describe the same group; that is not checked here.
    ``to_state.revision`` becomes the revision of the change whatever
    ``from_state.revision`` is.

    Args:
        from_state: Earlier snapshot.
        to_state: Later snapshot.
        validate: Check both snapshots for duplicate identities first.
            Defaults to the ``validate_snapshots`` setting.

    Returns:
        The change. It is empty apart from its revision when the two
        snapshots are equal.

    Raises:
        InvalidSnapshotError: If validation is on and a snapshot is malformed.
    """
    if validate is None:
        validate = get_config().validate_snapshots
    if validate:
        validate_snapshot(from_state, "from")
        validate_snapshot(to_state, "to")

    from_attrs, to_attrs = from_state.access_control, to_state.access_control

    # Membership set algebra
    from_members = identities_of(from_state.members)
    to_members = identities_of(to_state.members)
    from_pending = identities_of(from_state.pending_members)
    to_pending = identities_of(to_state.pending_members)
    from_requesting = identities_of(from_state.requesting_members)
    to_requesting = identities_of(to_state.requesting_members)
    from_banned = identities_of(from_state.banned_members)
    to_banned = identities_of(to_state.banned_members)

    removed_members = from_members.subtract(to_members)
    added_members = to_members.subtract(from_members)
    added_pending = to_pending.subtract(from_pending)
    added_requesting = to_requesting.subtract(from_requesting)

    classified = classify_additions(
        added_members,
        removed_pending=from_pending.subtract(to_pending),
        removed_requesting=from_requesting.subtract(to_requesting),
    )

    modify_member_roles, modified_profile_keys = _diff_member_attributes(
        from_state.members,
        to_state.members,
        from_members.intersect(to_members),
    )

    change = GroupChange(
        revision=to_state.revision,
        new_title=_changed(from_state.title, to_state.title),
        new_description=_changed(from_state.description, to_state.description),
        new_avatar=_changed(from_state.avatar, to_state.avatar),
        new_timer=_changed(from_state.disappearing_messages_timer, to_state.disappearing_messages_timer),
        new_is_announcement_group=_changed(from_state.is_announcement_group, to_state.is_announcement_group),
        new_attribute_access=_changed(from_attrs.attributes, to_attrs.attributes),
        new_member_access=_changed(from_attrs.members, to_attrs.members),
        new_invite_link_access=_changed(from_attrs.add_from_invite_link, to_attrs.add_from_invite_link),
        new_invite_link_password=_changed(from_state.invite_link_password, to_state.invite_link_password),
        delete_members=tuple(removed_members),
        new_members=select(to_state.members, classified.plain_new),
        promote_pending_members=select(to_state.members, classified.promoted_from_invite),
        promote_requesting_members=tuple(
            ApproveMember(identity=member.identity, role=member.role)
            for member in select(to_state.members, classified.promoted_from_request)
        ),
        delete_pending_members=tuple(
            PendingMemberRemoval(identity=pending.identity, identity_ciphertext=pending.identity_ciphertext)
            for pending in select(from_state.pending_members, classified.revoked_invites)
        ),
        new_pending_members=select(to_state.pending_members, added_pending),
        delete_requesting_members=tuple(
            requesting.identity
            for requesting in select(from_state.requesting_members, classified.rejected_requests)
        ),
        new_requesting_members=select(to_state.requesting_members, added_requesting),
        modify_member_roles=modify_member_roles,
        modified_profile_keys=modified_profile_keys,
        delete_banned_members=tuple(
            BannedMember(identity=identity) for identity in from_banned.subtract(to_banned)
        ),
        new_banned_members=tuple(
            BannedMember(identity=banned.identity, timestamp=banned.timestamp)
            for banned in select(to_state.banned_members, to_banned.subtract(from_banned))
        ),
    )

    if logger.isEnabledFor(logging.DEBUG):
        changed = change.changed_fields()
        logger.debug(
            f"Reconstructed change to revision {change.revision}: {', '.join(changed) or 'no changes'}",
            extra={
                "extra_data": {
                    "from_revision": from_state.revision,
                    "to_revision": to_state.revision,
                    "changed_fields": changed,
                }
            },
        )

    return change


def _changed(old, new):
    """Return ``new`` if it differs from ``old``, otherwise None."""
    return None if old == new else new


def _diff_member_attributes(
    from_members: tuple[Member, ...],
    to_members: tuple[Member, ...],
    retained: Set[bytes],
) -> tuple[tuple[ModifyMemberRole, ...], tuple[Member, ...]]:
    """Compare role and profile key of members present in both snapshots.

    Returns:
        (role modifications, new records of members whose profile key changed),
        both in ``to_members`` order.
    """
    before = index_by(from_members, lambda member: member.identity)
    roles: list[ModifyMemberRole] = []
    profile_keys: list[Member] = []

    for new in select(to_members, retained):
        old = before[new.identity]
        if old.role != new.role:
            roles.append(ModifyMemberRole(identity=new.identity, role=new.role))
        if old.profile_key != new.profile_key:
            profile_keys.append(new)

    return tuple(roles), tuple(profile_keys)
