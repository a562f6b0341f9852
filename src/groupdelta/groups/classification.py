# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Classification of membership additions and removals.

When an identity becomes an active member it either accepted an invite,
had a join request approved, or was added directly. Each newly added
member is assigned to exactly one of those, and invites or requests that
disappeared for any other reason are reported separately.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.ordered import OrderedSet


@dataclass(frozen=True)
class MembershipClassification:
    """Result of :func:`classify_additions`.

    Attributes:
        promoted_from_invite: Added members whose pending invite went away.
        promoted_from_request: Added members whose join request went away.
        plain_new: Added members that were neither invited nor requesting.
        revoked_invites: Pending invites removed without the invitee joining.
        rejected_requests: Join requests removed without the requester joining.
    """

    promoted_from_invite: OrderedSet[bytes]
    promoted_from_request: OrderedSet[bytes]
    plain_new: OrderedSet[bytes]
    revoked_invites: OrderedSet[bytes]
    rejected_requests: OrderedSet[bytes]


def classify_additions(
    added_members: OrderedSet[bytes],
    removed_pending: OrderedSet[bytes],
    removed_requesting: OrderedSet[bytes],
) -> MembershipClassification:
    """Split membership additions into promotions and plain additions.

    Promotion takes precedence: an identity that was added as a member and
    dropped from the pending list is a promoted invitee, never a new member
    plus a withdrawn invite. The same holds for join requests.

    An identity is assumed to never be in both the pending and the requesting
    list of one snapshot, so the two promotion sets are disjoint. That is
    not re-checked here; an identity breaking the assumption would be
    reported as both kinds of promotion.

    Args:
        added_members: Identities that are members only in the later snapshot.
        removed_pending: Identities pending only in the earlier snapshot.
        removed_requesting: Identities requesting only in the earlier snapshot.

    Returns:
        The five classified identity sets. Sets derived from
        ``added_members`` keep its order; the others keep the order of the
        removal set they come from.
    """
    promoted_from_invite = added_members.intersect(removed_pending)
    promoted_from_request = added_members.intersect(removed_requesting)

    return MembershipClassification(
        promoted_from_invite=promoted_from_invite,
        promoted_from_request=promoted_from_request,
        plain_new=added_members.subtract(promoted_from_invite, promoted_from_request),
        revoked_invites=removed_pending.subtract(promoted_from_invite),
        rejected_requests=removed_requesting.subtract(promoted_from_request),
    )
