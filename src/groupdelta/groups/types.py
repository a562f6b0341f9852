# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Enums shared by group snapshots and group changes."""

from enum import Enum


class MemberRole(str, Enum):
    """Role of an active member in a group."""

    DEFAULT = "default"  # Ordinary member
    ADMINISTRATOR = "administrator"  # Can change membership and settings


class AccessRequired(str, Enum):
    """Who may perform one category of change."""

    UNKNOWN = "unknown"
    ANY = "any"
    MEMBER = "member"
    ADMINISTRATOR = "administrator"
    UNSATISFIABLE = "unsatisfiable"  # Nobody, e.g. invite links disabled
