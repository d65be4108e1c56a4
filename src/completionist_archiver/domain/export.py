"""Export document consumed by the optimizer, and the records folded into it.

The document layout follows the scanner save format (schema version 3)
so the optimizer can import it without conversion.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from completionist_archiver import __version__

EXPORT_SOURCE = "completionist_archiver"
EXPORT_VERSION = 3


class Achievement(BaseModel):
    """An achievement id that passed validation."""

    model_config = {"frozen": True}

    id: int


class Book(BaseModel):
    """A book id that passed validation."""

    model_config = {"frozen": True}

    id: int


class ExportMetadata(BaseModel):
    model_config = {"frozen": True}

    uid: int | None = None


class ExportDocument(BaseModel):
    """Versioned save-data snapshot.

    Attributes:
        source: Fixed producer tag.
        build: Version of this package that produced the document.
        version: Document schema version, always ``3``.
        metadata: Account metadata; ``uid`` is null when never observed.
        achievements: Accepted achievement ids in arrival order.
        books: Accepted book ids in arrival order.
    """

    model_config = {"frozen": True}

    source: str = EXPORT_SOURCE
    build: str = __version__
    version: Literal[3] = EXPORT_VERSION
    metadata: ExportMetadata = Field(default_factory=ExportMetadata)
    achievements: list[int] = Field(default_factory=list)
    books: list[int] = Field(default_factory=list)
