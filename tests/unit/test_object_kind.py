"""
Unit tests for the object taxonomy
"""

import pytest
from models.object_kind import (
    AddressingStyle,
    CONTAINED_KINDS,
    KIND_SYNTAX,
    ObjectKind,
    STANDALONE_KINDS,
    Signature,
)


class TestObjectKind:
    """Test the kind table"""

    def test_every_kind_has_syntax(self):
        """No kind is missing from the syntax table"""
        assert set(KIND_SYNTAX) == set(ObjectKind)

    def test_families_partition_kinds(self):
        """Every kind is standalone or contained, never both"""
        assert STANDALONE_KINDS | CONTAINED_KINDS == set(ObjectKind)
        assert not STANDALONE_KINDS & CONTAINED_KINDS

    def test_contained_kinds(self):
        """Column, constraint, rule and trigger need an owner"""
        assert CONTAINED_KINDS == {
            ObjectKind.COLUMN,
            ObjectKind.CONSTRAINT,
            ObjectKind.RULE,
            ObjectKind.TRIGGER,
        }
        assert ObjectKind.COLUMN.is_contained
        assert not ObjectKind.TABLE.is_contained

    @pytest.mark.parametrize("kind,keyword", [
        (ObjectKind.TEXT_SEARCH_CONFIGURATION, "TEXT SEARCH CONFIGURATION"),
        (ObjectKind.MATERIALIZED_VIEW, "MATERIALIZED VIEW"),
        (ObjectKind.FOREIGN_DATA_WRAPPER, "FOREIGN DATA WRAPPER"),
        (ObjectKind.EVENT_TRIGGER, "EVENT TRIGGER"),
        (ObjectKind.LARGE_OBJECT, "LARGE OBJECT"),
        (ObjectKind.PROCEDURAL_LANGUAGE, "PROCEDURAL LANGUAGE"),
        (ObjectKind.OPERATOR_CLASS, "OPERATOR CLASS"),
        (ObjectKind.TABLE, "TABLE"),
        (ObjectKind.COLUMN, "COLUMN"),
    ])
    def test_keywords(self, kind, keyword):
        """Keyword phrases match PostgreSQL's grammar"""
        assert KIND_SYNTAX[kind].keyword == keyword

    def test_addressing_styles(self):
        """Columns use parent.name, the other contained kinds use name ON parent"""
        assert KIND_SYNTAX[ObjectKind.COLUMN].addressing is AddressingStyle.QUALIFIED_PAIR
        for kind in (ObjectKind.CONSTRAINT, ObjectKind.RULE, ObjectKind.TRIGGER):
            assert KIND_SYNTAX[kind].addressing is AddressingStyle.TRAILING_ON

    def test_signatures(self):
        """Kinds whose name alone is not enough carry a signature"""
        assert KIND_SYNTAX[ObjectKind.FUNCTION].signature is Signature.ARGUMENTS
        assert KIND_SYNTAX[ObjectKind.AGGREGATE].signature is Signature.AGGREGATE
        assert KIND_SYNTAX[ObjectKind.OPERATOR].signature is Signature.OPERANDS
        assert KIND_SYNTAX[ObjectKind.CAST].signature is Signature.CAST
        assert KIND_SYNTAX[ObjectKind.OPERATOR_FAMILY].signature is Signature.USING
        assert KIND_SYNTAX[ObjectKind.LARGE_OBJECT].signature is Signature.OID

    def test_shared_catalogs(self):
        """Databases, roles and tablespaces live in shared catalogs"""
        shared = {kind for kind, syntax in KIND_SYNTAX.items() if syntax.lookup.shared}

        assert shared == {ObjectKind.DATABASE, ObjectKind.ROLE, ObjectKind.TABLESPACE}

    def test_kind_from_string(self):
        """Kinds round-trip through their string value"""
        assert ObjectKind("text_search_parser") is ObjectKind.TEXT_SEARCH_PARSER
