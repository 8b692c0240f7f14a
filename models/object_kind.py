"""
PostgreSQL object taxonomy for COMMENT ON.

Every kind of object that can carry a comment is listed in ObjectKind, and
KIND_SYNTAX maps each one to the keyword phrase used after COMMENT ON, how
the object is addressed, and where its description lives in the catalog.
Adding a kind means adding one enum member and one KIND_SYNTAX entry; the
module refuses to import while the two disagree.
"""

from typing import Dict, NamedTuple, Optional
import enum


# ============================================================================
# ENUMS
# ============================================================================

class ObjectKind(str, enum.Enum):
    """Kinds of PostgreSQL objects that can be commented on"""
    # Standalone
    AGGREGATE = "aggregate"
    CAST = "cast"
    COLLATION = "collation"
    CONVERSION = "conversion"
    DATABASE = "database"
    DOMAIN = "domain"
    EXTENSION = "extension"
    EVENT_TRIGGER = "event_trigger"
    FOREIGN_DATA_WRAPPER = "foreign_data_wrapper"
    FOREIGN_TABLE = "foreign_table"
    FUNCTION = "function"
    INDEX = "index"
    LARGE_OBJECT = "large_object"
    MATERIALIZED_VIEW = "materialized_view"
    OPERATOR = "operator"
    OPERATOR_CLASS = "operator_class"
    OPERATOR_FAMILY = "operator_family"
    LANGUAGE = "language"
    PROCEDURAL_LANGUAGE = "procedural_language"
    ROLE = "role"
    SCHEMA = "schema"
    SEQUENCE = "sequence"
    SERVER = "server"
    TABLE = "table"
    TABLESPACE = "tablespace"
    TEXT_SEARCH_CONFIGURATION = "text_search_configuration"
    TEXT_SEARCH_DICTIONARY = "text_search_dictionary"
    TEXT_SEARCH_PARSER = "text_search_parser"
    TEXT_SEARCH_TEMPLATE = "text_search_template"
    TYPE = "type"
    VIEW = "view"
    # Contained
    COLUMN = "column"
    CONSTRAINT = "constraint"
    RULE = "rule"
    TRIGGER = "trigger"

    @property
    def is_contained(self) -> bool:
        """True when the object only exists relative to an owning object"""
        return KIND_SYNTAX[self].addressing is not AddressingStyle.STANDALONE


class AddressingStyle(str, enum.Enum):
    """How the object name is written after the keyword"""
    STANDALONE = "standalone"          # <name>
    QUALIFIED_PAIR = "qualified_pair"  # <parent>.<name>
    TRAILING_ON = "trailing_on"        # <name> ON <parent>


class Signature(str, enum.Enum):
    """What completes a standalone object's name"""
    NAME = "name"                # schema.name
    ARGUMENTS = "arguments"      # name(type, ...), list optional
    AGGREGATE = "aggregate"      # name(type, ...) or name(*)
    OPERANDS = "operands"        # op (left, right)
    CAST = "cast"                # (source AS target)
    USING = "using"              # name USING access_method
    OID = "oid"                  # large object OID


class LookupStyle(str, enum.Enum):
    """How the object's OID is found in the catalog"""
    REGCLASS = "regclass"
    REGPROC = "regproc"
    REGOPER = "regoper"
    REGTYPE = "regtype"
    REGNAMESPACE = "regnamespace"
    REGROLE = "regrole"
    NAMED = "named"              # unique name column, no schema
    NAMESPACED = "namespaced"    # name column + namespace column
    CAST = "cast"
    LARGE_OBJECT = "large_object"
    ATTRIBUTE = "attribute"      # column of a relation
    RELATION_MEMBER = "relation_member"


# ============================================================================
# SYNTAX TABLE
# ============================================================================

class CatalogLookup(NamedTuple):
    """Catalog holding the object and the columns used to find it"""
    catalog: str
    style: LookupStyle
    name_column: Optional[str] = None
    owner_column: Optional[str] = None
    visibility: Optional[str] = None
    method_column: Optional[str] = None
    shared: bool = False


class KindSyntax(NamedTuple):
    """Everything needed to address one ObjectKind"""
    keyword: str
    addressing: AddressingStyle
    signature: Signature
    lookup: CatalogLookup
    schema_qualified: bool = False


_STANDALONE = AddressingStyle.STANDALONE

_RELATION = CatalogLookup("pg_class", LookupStyle.REGCLASS)
_PROC = CatalogLookup("pg_proc", LookupStyle.REGPROC)
_TYPE = CatalogLookup("pg_type", LookupStyle.REGTYPE)
_LANGUAGE = CatalogLookup("pg_language", LookupStyle.NAMED, name_column="lanname")


def _namespaced(catalog: str, prefix: str, visibility: str, method: bool = False) -> CatalogLookup:
    return CatalogLookup(
        catalog,
        LookupStyle.NAMESPACED,
        name_column=f"{prefix}name",
        owner_column=f"{prefix}namespace",
        visibility=visibility,
        method_column=f"{prefix}method" if method else None,
    )


KIND_SYNTAX: Dict[ObjectKind, KindSyntax] = {
    ObjectKind.AGGREGATE: KindSyntax(
        "AGGREGATE", _STANDALONE, Signature.AGGREGATE, _PROC, schema_qualified=True),
    ObjectKind.CAST: KindSyntax(
        "CAST", _STANDALONE, Signature.CAST, CatalogLookup("pg_cast", LookupStyle.CAST)),
    ObjectKind.COLLATION: KindSyntax(
        "COLLATION", _STANDALONE, Signature.NAME,
        _namespaced("pg_collation", "coll", "pg_collation_is_visible"), schema_qualified=True),
    ObjectKind.CONVERSION: KindSyntax(
        "CONVERSION", _STANDALONE, Signature.NAME,
        _namespaced("pg_conversion", "con", "pg_conversion_is_visible"), schema_qualified=True),
    ObjectKind.DATABASE: KindSyntax(
        "DATABASE", _STANDALONE, Signature.NAME,
        CatalogLookup("pg_database", LookupStyle.NAMED, name_column="datname", shared=True)),
    ObjectKind.DOMAIN: KindSyntax(
        "DOMAIN", _STANDALONE, Signature.NAME, _TYPE, schema_qualified=True),
    ObjectKind.EXTENSION: KindSyntax(
        "EXTENSION", _STANDALONE, Signature.NAME,
        CatalogLookup("pg_extension", LookupStyle.NAMED, name_column="extname")),
    ObjectKind.EVENT_TRIGGER: KindSyntax(
        "EVENT TRIGGER", _STANDALONE, Signature.NAME,
        CatalogLookup("pg_event_trigger", LookupStyle.NAMED, name_column="evtname")),
    ObjectKind.FOREIGN_DATA_WRAPPER: KindSyntax(
        "FOREIGN DATA WRAPPER", _STANDALONE, Signature.NAME,
        CatalogLookup("pg_foreign_data_wrapper", LookupStyle.NAMED, name_column="fdwname")),
    ObjectKind.FOREIGN_TABLE: KindSyntax(
        "FOREIGN TABLE", _STANDALONE, Signature.NAME, _RELATION, schema_qualified=True),
    ObjectKind.FUNCTION: KindSyntax(
        "FUNCTION", _STANDALONE, Signature.ARGUMENTS, _PROC, schema_qualified=True),
    ObjectKind.INDEX: KindSyntax(
        "INDEX", _STANDALONE, Signature.NAME, _RELATION, schema_qualified=True),
    ObjectKind.LARGE_OBJECT: KindSyntax(
        "LARGE OBJECT", _STANDALONE, Signature.OID,
        CatalogLookup("pg_largeobject", LookupStyle.LARGE_OBJECT)),
    ObjectKind.MATERIALIZED_VIEW: KindSyntax(
        "MATERIALIZED VIEW", _STANDALONE, Signature.NAME, _RELATION, schema_qualified=True),
    ObjectKind.OPERATOR: KindSyntax(
        "OPERATOR", _STANDALONE, Signature.OPERANDS,
        CatalogLookup("pg_operator", LookupStyle.REGOPER), schema_qualified=True),
    ObjectKind.OPERATOR_CLASS: KindSyntax(
        "OPERATOR CLASS", _STANDALONE, Signature.USING,
        _namespaced("pg_opclass", "opc", "pg_opclass_is_visible", method=True),
        schema_qualified=True),
    ObjectKind.OPERATOR_FAMILY: KindSyntax(
        "OPERATOR FAMILY", _STANDALONE, Signature.USING,
        _namespaced("pg_opfamily", "opf", "pg_opfamily_is_visible", method=True),
        schema_qualified=True),
    ObjectKind.LANGUAGE: KindSyntax(
        "LANGUAGE", _STANDALONE, Signature.NAME, _LANGUAGE),
    ObjectKind.PROCEDURAL_LANGUAGE: KindSyntax(
        "PROCEDURAL LANGUAGE", _STANDALONE, Signature.NAME, _LANGUAGE),
    ObjectKind.ROLE: KindSyntax(
        "ROLE", _STANDALONE, Signature.NAME,
        CatalogLookup("pg_authid", LookupStyle.REGROLE, shared=True)),
    ObjectKind.SCHEMA: KindSyntax(
        "SCHEMA", _STANDALONE, Signature.NAME,
        CatalogLookup("pg_namespace", LookupStyle.REGNAMESPACE)),
    ObjectKind.SEQUENCE: KindSyntax(
        "SEQUENCE", _STANDALONE, Signature.NAME, _RELATION, schema_qualified=True),
    ObjectKind.SERVER: KindSyntax(
        "SERVER", _STANDALONE, Signature.NAME,
        CatalogLookup("pg_foreign_server", LookupStyle.NAMED, name_column="srvname")),
    ObjectKind.TABLE: KindSyntax(
        "TABLE", _STANDALONE, Signature.NAME, _RELATION, schema_qualified=True),
    ObjectKind.TABLESPACE: KindSyntax(
        "TABLESPACE", _STANDALONE, Signature.NAME,
        CatalogLookup("pg_tablespace", LookupStyle.NAMED, name_column="spcname", shared=True)),
    ObjectKind.TEXT_SEARCH_CONFIGURATION: KindSyntax(
        "TEXT SEARCH CONFIGURATION", _STANDALONE, Signature.NAME,
        _namespaced("pg_ts_config", "cfg", "pg_ts_config_is_visible"), schema_qualified=True),
    ObjectKind.TEXT_SEARCH_DICTIONARY: KindSyntax(
        "TEXT SEARCH DICTIONARY", _STANDALONE, Signature.NAME,
        _namespaced("pg_ts_dict", "dict", "pg_ts_dict_is_visible"), schema_qualified=True),
    ObjectKind.TEXT_SEARCH_PARSER: KindSyntax(
        "TEXT SEARCH PARSER", _STANDALONE, Signature.NAME,
        _namespaced("pg_ts_parser", "prs", "pg_ts_parser_is_visible"), schema_qualified=True),
    ObjectKind.TEXT_SEARCH_TEMPLATE: KindSyntax(
        "TEXT SEARCH TEMPLATE", _STANDALONE, Signature.NAME,
        _namespaced("pg_ts_template", "tmpl", "pg_ts_template_is_visible"), schema_qualified=True),
    ObjectKind.TYPE: KindSyntax(
        "TYPE", _STANDALONE, Signature.NAME, _TYPE, schema_qualified=True),
    ObjectKind.VIEW: KindSyntax(
        "VIEW", _STANDALONE, Signature.NAME, _RELATION, schema_qualified=True),
    ObjectKind.COLUMN: KindSyntax(
        "COLUMN", AddressingStyle.QUALIFIED_PAIR, Signature.NAME,
        CatalogLookup("pg_class", LookupStyle.ATTRIBUTE, name_column="attname", owner_column="attrelid")),
    ObjectKind.CONSTRAINT: KindSyntax(
        "CONSTRAINT", AddressingStyle.TRAILING_ON, Signature.NAME,
        CatalogLookup("pg_constraint", LookupStyle.RELATION_MEMBER,
                      name_column="conname", owner_column="conrelid")),
    ObjectKind.RULE: KindSyntax(
        "RULE", AddressingStyle.TRAILING_ON, Signature.NAME,
        CatalogLookup("pg_rewrite", LookupStyle.RELATION_MEMBER,
                      name_column="rulename", owner_column="ev_class")),
    ObjectKind.TRIGGER: KindSyntax(
        "TRIGGER", AddressingStyle.TRAILING_ON, Signature.NAME,
        CatalogLookup("pg_trigger", LookupStyle.RELATION_MEMBER,
                      name_column="tgname", owner_column="tgrelid")),
}


def _check_exhaustive() -> None:
    missing = [kind.value for kind in ObjectKind if kind not in KIND_SYNTAX]
    if missing:
        raise RuntimeError(f"No COMMENT ON syntax for object kinds: {', '.join(missing)}")


_check_exhaustive()


STANDALONE_KINDS = frozenset(k for k in ObjectKind if not k.is_contained)
CONTAINED_KINDS = frozenset(k for k in ObjectKind if k.is_contained)
