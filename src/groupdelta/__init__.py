# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""groupdelta - Group state reconciliation.

Given two snapshots of a group taken at two revisions of one linear
history, groupdelta computes the single change record that turns the first
into the second:

  GroupSnapshot (from) ─┐
                        ├─ reconstruct() → GroupChange
  GroupSnapshot (to) ───┘

Key design principles:
  - Pure: no I/O, no shared mutable state; safe to call concurrently.
  - Deterministic: output order follows the snapshots' own sequences.
  - Classified: invite acceptances and approved join requests are
    promotions, never a removal plus an addition.
  - Honest: a value missing from the input stays missing in the output.
"""

__version__ = "1.0.0"

from .groups import GroupChange, GroupSnapshot, reconstruct

__all__ = ["GroupChange", "GroupSnapshot", "reconstruct", "__version__"]
