"""Shared type aliases used across the domain."""
from __future__ import annotations

from typing import Any, TypeAlias

VisitId: TypeAlias = str
PageId: TypeAlias = str
Timestamp: TypeAlias = int  # milliseconds since the Unix epoch
Document: TypeAlias = dict[str, Any]
