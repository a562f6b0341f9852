# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""groupdelta core - configuration, logging, errors and ordered collections."""

from .config import CoreSettings, clear_config_cache, get_config
from .exceptions import (
    DuplicateKeyError,
    GroupDeltaException,
    InvalidSnapshotError,
    ValidationException,
)
from .logging import JSONFormatter, TextFormatter, configure_logging
from .ordered import OrderedSet, identities_of, index_by, select

__all__ = [
    # Config
    "CoreSettings",
    "get_config",
    "clear_config_cache",
    # Exceptions
    "GroupDeltaException",
    "ValidationException",
    "DuplicateKeyError",
    "InvalidSnapshotError",
    # Logging
    "configure_logging",
    "JSONFormatter",
    "TextFormatter",
    # Ordered collections
    "OrderedSet",
    "identities_of",
    "index_by",
    "select",
]
