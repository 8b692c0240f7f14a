"""
Pydantic schema describing which database object a comment belongs to
"""

from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List, Tuple, Union
from models.object_kind import ObjectKind


NameParts = Tuple[str, ...]
TypeName = Union[str, NameParts]


class CommentTarget(BaseModel):
    """
    The object a comment is set on or read from.

    Names are given either as a dotted string (``"public.users"``) or as a
    tuple of parts (``("public", "my.table")``) when a part itself contains
    a dot. Parts are always raw names; quoting is applied when SQL is built.

    Fields:
        kind: ObjectKind (or its string value); unknown kinds are rejected
            when SQL is built, not here
        identifier: name of the object, or the OID of a large object
        parent_identifier: owning relation, required for column,
            constraint, rule and trigger
        arguments: argument types of a function, aggregate or operator,
            source and target type of a cast, access method of an
            operator class or family; a user-defined type whose name
            has unusual characters is given as a tuple of name parts
    """

    model_config = ConfigDict(frozen=True)

    kind: Union[ObjectKind, str]
    identifier: Optional[Union[int, str, NameParts]] = None
    parent_identifier: Optional[Union[str, NameParts]] = None
    arguments: Optional[List[TypeName]] = None

    @field_validator("arguments", mode="before")
    @classmethod
    def clean_arguments(cls, v):
        """Strip surrounding whitespace from type names given as strings"""
        if v is None:
            return None
        if isinstance(v, str):
            return [v.strip()]
        return [tuple(a) if isinstance(a, (tuple, list)) else str(a).strip() for a in v]

    def describe(self) -> str:
        """Short human-readable form used in log messages"""
        kind = self.kind.value if isinstance(self.kind, ObjectKind) else str(self.kind)
        name = _display(self.identifier)
        if self.parent_identifier is not None:
            name = f"{name} of {_display(self.parent_identifier)}"
        if self.arguments is not None:
            name = f"{name}({', '.join(_display(a) for a in self.arguments)})"
        return f"{kind} {name}"


def _display(name) -> str:
    if isinstance(name, tuple):
        return ".".join(name)
    return str(name)
