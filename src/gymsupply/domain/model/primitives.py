"""Domain primitives: scalar aliases.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

from typing import TypeAlias
from uuid import UUID

PartNumber: TypeAlias = str
StorageId: TypeAlias = UUID
CollectionName: TypeAlias = str
