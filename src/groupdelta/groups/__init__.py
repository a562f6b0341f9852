# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Group state reconciliation.

Computes the minimal, classified change between two snapshots of a group's
membership and metadata.

Key concepts:
- GroupSnapshot: Full state of a group at one revision
- GroupChange: Sparse record of what changed between two revisions
- Promotion: An invitee or requester becoming a member, reported as one
  event instead of a removal plus an addition

Submodules:
- types: Member roles and access levels
- state: Snapshot records and snapshot validation
- change: Change records
- classification: Splitting membership additions into promotions and plain adds
- reconcile: The reconstruct operation
"""

from .change import (
    ApproveMember,
    GroupChange,
    ModifyMemberRole,
    PendingMemberRemoval,
)
from .classification import MembershipClassification, classify_additions
from .reconcile import reconstruct
from .state import (
    MAX_REVISION,
    AccessControl,
    BannedMember,
    GroupSnapshot,
    Member,
    PendingMember,
    RequestingMember,
    validate_snapshot,
)
from .types import AccessRequired, MemberRole

__all__ = [
    # Constants
    "MAX_REVISION",
    # Enums
    "MemberRole",
    "AccessRequired",
    # Snapshot records
    "Member",
    "PendingMember",
    "RequestingMember",
    "BannedMember",
    "AccessControl",
    "GroupSnapshot",
    # Change records
    "GroupChange",
    "ModifyMemberRole",
    "ApproveMember",
    "PendingMemberRemoval",
    "MembershipClassification",
    # Operations
    "reconstruct",
    "classify_additions",
    "validate_snapshot",
]
