"""
Build COMMENT ON statements and catalog queries for PostgreSQL objects
"""

from typing import List, Optional, Sequence, Tuple, Union
from sqlalchemy.dialects import postgresql
from models.object_kind import (
    AddressingStyle,
    CatalogLookup,
    KIND_SYNTAX,
    KindSyntax,
    LookupStyle,
    ObjectKind,
    Signature,
)
from schemas.comment import CommentTarget, TypeName
from core.exceptions import (
    InvalidTargetError,
    MissingParentError,
    UnknownObjectKindError,
)
import logging
import re

logger = logging.getLogger(__name__)

_RESERVED_WORDS = postgresql.dialect().identifier_preparer.reserved_words

_PLAIN_IDENTIFIER = re.compile(r"[a-z_][a-z0-9_]*")
_OPERATOR_NAME = re.compile(r"[+\-*/<>=~!@#%^&|`?]+")
_ARRAY_SUFFIX = re.compile(r"(?:\s*\[\s*\d*\s*\])+\Z", re.ASCII)
_TYPE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_$ ]*(?:\.[A-Za-z_][A-Za-z0-9_$ ]*)?")
_BUILTIN_TYPE = re.compile(
    r"(?P<base>[a-z][a-z0-9_]*(?: [a-z][a-z0-9_]*)*)"
    r"(?P<typmod>\s*\(\s*\d+\s*(?:,\s*\d+\s*)?\))?",
    re.IGNORECASE | re.ASCII,
)

# Spelled with SQL keywords, so never written as quoted identifiers
_BUILTIN_TYPE_NAMES = frozenset({
    "bigint", "bigserial", "bit", "bit varying", "boolean", "bool", "bytea",
    "char", "character", "character varying", "varchar", "date",
    "dec", "decimal", "double precision", "float", "float4", "float8",
    "int", "int2", "int4", "int8", "integer", "interval", "json", "jsonb",
    "national character", "national character varying", "nchar",
    "numeric", "real", "serial", "smallint", "smallserial", "text",
    "time", "time with time zone", "time without time zone", "timetz",
    "timestamp", "timestamp with time zone", "timestamp without time zone",
    "timestamptz", "uuid", "varbit", "xml",
})


# ============================================================================
# Quoting
# ============================================================================

def quote_identifier(name: str) -> str:
    """
    Quote a single name part if PostgreSQL would not read it back unchanged.

    Lower-case names made of ``[a-z0-9_]`` that are not reserved words are
    left bare; everything else is double-quoted with embedded quotes doubled.
    """
    if _PLAIN_IDENTIFIER.fullmatch(name) and name not in _RESERVED_WORDS:
        return name
    return '"' + name.replace('"', '""') + '"'


def quote_qualified(parts: Sequence[str]) -> str:
    """Quote each part of a qualified name independently"""
    return ".".join(quote_identifier(p) for p in parts)


def quote_literal(value: str) -> str:
    """Render ``value`` as a standard SQL string literal"""
    return "'" + value.replace("'", "''") + "'"


def resolve_kind(kind: Union[ObjectKind, str]) -> ObjectKind:
    """Map a kind (enum member or its value) to ObjectKind"""
    if isinstance(kind, ObjectKind):
        return kind
    try:
        return ObjectKind(kind)
    except ValueError:
        raise UnknownObjectKindError(
            f"Unknown object kind: {kind!r}",
            context={"kind": kind}
        ) from None


# ============================================================================
# Builder
# ============================================================================

class CommentStatementBuilder:
    """
    Turn a CommentTarget into SQL.

    - build_set: COMMENT ON statement setting or clearing the comment
    - build_get: query returning the stored comment (or NULL)
    - build_resolve: query returning the object's OID (or NULL)

    Targets are validated before anything is built; a ConfigurationError
    means no SQL was produced. The builder holds no state and can be shared.
    """

    def build_set(self, target: CommentTarget, comment: Optional[str]) -> str:
        """
        Build the statement that sets (or, with ``comment=None``, clears)
        the comment on ``target``.
        """
        kind, syntax = self._validate(target)
        value = "NULL" if comment is None else quote_literal(comment)
        sql = f"COMMENT ON {syntax.keyword} {self._address(target, kind, syntax)} IS {value}"
        logger.debug(f"Built comment statement for {target.describe()}: {sql}")
        return sql

    def build_get(self, target: CommentTarget) -> str:
        """
        Build a query returning the description stored for ``target``.

        The query yields at most one row with one column; the value is NULL
        (or there is no row) when the object has no comment or does not exist.
        """
        kind, syntax = self._validate(target)
        lookup = syntax.lookup

        if lookup.style is LookupStyle.ATTRIBUTE:
            sql = (
                "SELECT col_description(a.attrelid, a.attnum) "
                f"FROM pg_attribute a {self._attribute_filter(target)}"
            )
        elif lookup.style is LookupStyle.RELATION_MEMBER:
            sql = (
                f"SELECT obj_description(m.oid, {quote_literal(lookup.catalog)}) "
                f"FROM {lookup.catalog} m {self._member_filter(target, lookup)}"
            )
        else:
            function = "shobj_description" if lookup.shared else "obj_description"
            oid = self._oid_expression(target, kind, syntax)
            sql = f"SELECT {function}({oid}, {quote_literal(lookup.catalog)})"

        logger.debug(f"Built comment query for {target.describe()}: {sql}")
        return sql

    def build_resolve(self, target: CommentTarget) -> str:
        """
        Build a query returning the OID of ``target``, or NULL if it does
        not exist. For columns the OID of the owning relation is returned
        when the column exists.
        """
        kind, syntax = self._validate(target)
        lookup = syntax.lookup

        if lookup.style is LookupStyle.ATTRIBUTE:
            return f"SELECT a.attrelid::oid FROM pg_attribute a {self._attribute_filter(target)}"
        if lookup.style is LookupStyle.RELATION_MEMBER:
            return f"SELECT m.oid FROM {lookup.catalog} m {self._member_filter(target, lookup)}"
        return f"SELECT {self._oid_expression(target, kind, syntax)}"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate(self, target: CommentTarget) -> Tuple[ObjectKind, KindSyntax]:
        kind = resolve_kind(target.kind)
        syntax = KIND_SYNTAX[kind]
        context = {"kind": kind.value, "identifier": target.identifier}

        if syntax.addressing is AddressingStyle.STANDALONE:
            if target.parent_identifier is not None:
                raise InvalidTargetError(
                    f"A {kind.value} is not contained in another object",
                    context={**context, "parent_identifier": target.parent_identifier}
                )
        elif target.parent_identifier is None:
            raise MissingParentError(
                f"A {kind.value} can only be addressed through the object that owns it",
                context=context
            )

        if syntax.signature is Signature.NAME and target.arguments is not None:
            raise InvalidTargetError(
                f"A {kind.value} does not take arguments",
                context={**context, "arguments": target.arguments}
            )

        if syntax.signature is not Signature.CAST and target.identifier is None:
            raise InvalidTargetError(f"A {kind.value} needs an identifier", context=context)

        return kind, syntax

    def _name_parts(self, name, kind: ObjectKind, max_parts: int) -> Tuple[str, ...]:
        if isinstance(name, str):
            parts = tuple(name.split("."))
        elif isinstance(name, (tuple, list)):
            parts = tuple(name)
        else:
            raise InvalidTargetError(
                f"A {kind.value} is addressed by name, not {type(name).__name__}",
                context={"kind": kind.value, "identifier": name}
            )

        if not parts or any(not isinstance(p, str) or not p for p in parts):
            raise InvalidTargetError(
                f"Empty name for {kind.value}",
                context={"kind": kind.value, "identifier": name}
            )
        if len(parts) > max_parts:
            raise InvalidTargetError(
                f"A {kind.value} name has at most {max_parts} part(s)",
                context={"kind": kind.value, "identifier": name}
            )
        return parts

    def _own_name(self, target: CommentTarget, kind: ObjectKind, syntax: KindSyntax) -> Tuple[str, ...]:
        max_parts = 2 if syntax.schema_qualified else 1
        return self._name_parts(target.identifier, kind, max_parts)

    def _parent_name(self, target: CommentTarget, kind: ObjectKind) -> Tuple[str, ...]:
        return self._name_parts(target.parent_identifier, kind, 2)

    def _type_names(self, kind: ObjectKind, arguments: Sequence[TypeName], operands: bool = False) -> List[str]:
        return [self._type_name(kind, arg, operands) for arg in arguments]

    def _type_name(self, kind: ObjectKind, arg: TypeName, operand: bool = False) -> str:
        """
        Render one argument type.

        Built-in types spelled with keywords (``double precision``,
        ``character varying(20)``) are written bare, lower-cased. Any other string
        is the name of a type (``"My Type"``, ``"public.mood"``) and is
        quoted like any other qualified name; names with other characters
        must be passed as a tuple of parts. A trailing ``[]`` on a string
        makes either kind an array.
        """
        if not isinstance(arg, str):
            return quote_qualified(self._name_parts(arg, kind, 2))
        if operand and arg.upper() == "NONE":
            return "NONE"

        suffix = _ARRAY_SUFFIX.search(arg)
        base = arg[:suffix.start()].rstrip() if suffix else arg
        array = "[]" * suffix.group(0).count("[") if suffix else ""

        builtin = _BUILTIN_TYPE.fullmatch(base)
        if builtin and builtin.group("base").lower() in _BUILTIN_TYPE_NAMES:
            typmod = re.sub(r"\s+", "", builtin.group("typmod") or "")
            return builtin.group("base").lower() + typmod + array

        if not _TYPE_NAME.fullmatch(base):
            raise InvalidTargetError(
                f"Not a type name: {arg!r}",
                context={"kind": kind.value, "arguments": [arg]}
            )
        return quote_qualified(self._name_parts(base, kind, 2)) + array

    def _large_object_oid(self, target: CommentTarget) -> int:
        oid = target.identifier
        if isinstance(oid, str) and oid.isdigit():
            oid = int(oid)
        if not isinstance(oid, int) or isinstance(oid, bool) or oid < 0:
            raise InvalidTargetError(
                "A large object is addressed by its OID",
                context={"kind": ObjectKind.LARGE_OBJECT.value, "identifier": target.identifier}
            )
        return oid

    def _operator_parts(self, target: CommentTarget, kind: ObjectKind) -> Tuple[str, ...]:
        parts = self._name_parts(target.identifier, kind, 2)
        operator = parts[-1]
        # "--" and "/*" would start an SQL comment
        if not _OPERATOR_NAME.fullmatch(operator) or "--" in operator or "/*" in operator:
            raise InvalidTargetError(
                f"Not an operator name: {parts[-1]!r}",
                context={"kind": kind.value, "identifier": target.identifier}
            )
        return parts

    def _exact_arguments(self, target: CommentTarget, kind: ObjectKind, count: int, what: str) -> List[TypeName]:
        if target.arguments is None or len(target.arguments) != count:
            raise InvalidTargetError(
                f"A {kind.value} needs {what}",
                context={"kind": kind.value, "arguments": target.arguments}
            )
        return target.arguments

    # ------------------------------------------------------------------
    # COMMENT ON addressing
    # ------------------------------------------------------------------

    def _address(self, target: CommentTarget, kind: ObjectKind, syntax: KindSyntax) -> str:
        if syntax.addressing is AddressingStyle.QUALIFIED_PAIR:
            column = self._name_parts(target.identifier, kind, 1)
            return f"{quote_qualified(self._parent_name(target, kind))}.{quote_identifier(column[0])}"

        if syntax.addressing is AddressingStyle.TRAILING_ON:
            name = self._name_parts(target.identifier, kind, 1)
            return f"{quote_identifier(name[0])} ON {quote_qualified(self._parent_name(target, kind))}"

        signature = syntax.signature

        if signature is Signature.OID:
            return str(self._large_object_oid(target))

        if signature is Signature.CAST:
            source, dest = self._type_names(kind, self._exact_arguments(target, kind, 2, "a source and a target type"))
            return f"({source} AS {dest})"

        if signature is Signature.OPERANDS:
            parts = self._operator_parts(target, kind)
            left, right = self._type_names(
                kind, self._exact_arguments(target, kind, 2, "a left and a right operand type"), operands=True)
            name = ".".join([quote_identifier(p) for p in parts[:-1]] + [parts[-1]])
            return f"{name} ({left}, {right})"

        name = quote_qualified(self._own_name(target, kind, syntax))

        if signature is Signature.ARGUMENTS:
            if target.arguments is None:
                return name
            return f"{name}({', '.join(self._type_names(kind, target.arguments))})"

        if signature is Signature.AGGREGATE:
            if not target.arguments:
                return f"{name}(*)"
            return f"{name}({', '.join(self._type_names(kind, target.arguments))})"

        if signature is Signature.USING:
            method = self._name_parts(self._exact_arguments(target, kind, 1, "an access method")[0], kind, 1)
            return f"{name} USING {quote_identifier(method[0])}"

        return name

    # ------------------------------------------------------------------
    # Catalog lookups
    # ------------------------------------------------------------------

    def _attribute_filter(self, target: CommentTarget) -> str:
        kind = ObjectKind.COLUMN
        relation = quote_qualified(self._parent_name(target, kind))
        column = self._name_parts(target.identifier, kind, 1)[0]
        return (
            f"WHERE a.attrelid = to_regclass({quote_literal(relation)}) "
            f"AND a.attname = {quote_literal(column)} "
            "AND a.attnum > 0 AND NOT a.attisdropped"
        )

    def _member_filter(self, target: CommentTarget, lookup: CatalogLookup) -> str:
        kind = resolve_kind(target.kind)
        relation = quote_qualified(self._parent_name(target, kind))
        name = self._name_parts(target.identifier, kind, 1)[0]
        return (
            f"WHERE m.{lookup.name_column} = {quote_literal(name)} "
            f"AND m.{lookup.owner_column} = to_regclass({quote_literal(relation)})"
        )

    def _oid_expression(self, target: CommentTarget, kind: ObjectKind, syntax: KindSyntax) -> str:
        lookup = syntax.lookup
        style = lookup.style

        if style is LookupStyle.LARGE_OBJECT:
            oid = self._large_object_oid(target)
            return f"(SELECT oid FROM pg_largeobject_metadata WHERE oid = {oid})"

        if style is LookupStyle.CAST:
            source, dest = self._type_names(kind, self._exact_arguments(target, kind, 2, "a source and a target type"))
            return (
                "(SELECT oid FROM pg_cast "
                f"WHERE castsource = to_regtype({quote_literal(source)})::oid "
                f"AND casttarget = to_regtype({quote_literal(dest)})::oid)"
            )

        if style is LookupStyle.REGOPER:
            parts = self._operator_parts(target, kind)
            left, right = self._type_names(
                kind, self._exact_arguments(target, kind, 2, "a left and a right operand type"), operands=True)
            name = ".".join([quote_identifier(p) for p in parts[:-1]] + [parts[-1]])
            return f"to_regoperator({quote_literal(f'{name}({left},{right})')})::oid"

        parts = self._own_name(target, kind, syntax)
        qualified = quote_qualified(parts)

        if style is LookupStyle.REGCLASS:
            return f"to_regclass({quote_literal(qualified)})::oid"
        if style is LookupStyle.REGTYPE:
            return f"to_regtype({quote_literal(qualified)})::oid"
        if style is LookupStyle.REGNAMESPACE:
            return f"to_regnamespace({quote_literal(qualified)})::oid"
        if style is LookupStyle.REGROLE:
            return f"to_regrole({quote_literal(qualified)})::oid"

        if style is LookupStyle.REGPROC:
            arguments = target.arguments
            if arguments is None and syntax.signature is Signature.ARGUMENTS:
                return f"to_regproc({quote_literal(qualified)})::oid"
            signature = ",".join(self._type_names(kind, arguments or []))
            return f"to_regprocedure({quote_literal(f'{qualified}({signature})')})::oid"

        if style is LookupStyle.NAMED:
            return (
                f"(SELECT oid FROM {lookup.catalog} "
                f"WHERE {lookup.name_column} = {quote_literal(parts[0])})"
            )

        if style is LookupStyle.NAMESPACED:
            conditions = [f"{lookup.name_column} = {quote_literal(parts[-1])}"]
            if len(parts) == 2:
                schema = quote_identifier(parts[0])
                conditions.append(f"{lookup.owner_column} = to_regnamespace({quote_literal(schema)})::oid")
            else:
                conditions.append(f"{lookup.visibility}(oid)")
            if lookup.method_column:
                method = self._exact_arguments(target, kind, 1, "an access method")[0]
                method = self._name_parts(method, kind, 1)[0]
                conditions.append(
                    f"{lookup.method_column} = (SELECT oid FROM pg_am WHERE amname = {quote_literal(method)})"
                )
            return f"(SELECT oid FROM {lookup.catalog} WHERE {' AND '.join(conditions)})"

        raise RuntimeError(f"No catalog lookup for {kind.value}")
