"""
PostgreSQL object taxonomy.

Models:
    object_kind: ObjectKind enum and the per-kind COMMENT ON syntax table

Usage:
    from models.object_kind import ObjectKind, KIND_SYNTAX

Example:
    syntax = KIND_SYNTAX[ObjectKind.MATERIALIZED_VIEW]
    syntax.keyword      # "MATERIALIZED VIEW"
    syntax.addressing   # AddressingStyle.STANDALONE
"""

from models.object_kind import (
    AddressingStyle,
    CatalogLookup,
    CONTAINED_KINDS,
    KIND_SYNTAX,
    KindSyntax,
    LookupStyle,
    ObjectKind,
    Signature,
    STANDALONE_KINDS,
)

__all__ = [
    "ObjectKind",
    "AddressingStyle",
    "Signature",
    "LookupStyle",
    "CatalogLookup",
    "KindSyntax",
    "KIND_SYNTAX",
    "STANDALONE_KINDS",
    "CONTAINED_KINDS",
]
