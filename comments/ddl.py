"""
Apply and read comments declared on SQLAlchemy Table and Column objects
"""

from typing import Dict, Optional, Tuple
from sqlalchemy import Table
from comments.service import CommentService
from core.exceptions import InvalidTargetError
from models.object_kind import ObjectKind
from schemas.comment import CommentTarget
import logging

logger = logging.getLogger(__name__)

_RELATION_KINDS = (
    ObjectKind.TABLE,
    ObjectKind.VIEW,
    ObjectKind.MATERIALIZED_VIEW,
    ObjectKind.FOREIGN_TABLE,
)


def table_name(table: Table) -> Tuple[str, ...]:
    """Name parts of ``table``, schema first when it has one"""
    if table.schema:
        return (table.schema, table.name)
    return (table.name,)


def table_target(table: Table, kind: ObjectKind = ObjectKind.TABLE) -> CommentTarget:
    """CommentTarget for the relation behind ``table``"""
    if kind not in _RELATION_KINDS:
        raise InvalidTargetError(
            f"{kind.value} is not a relation kind",
            context={"kind": kind.value, "table": table.name}
        )
    return CommentTarget(kind=kind, identifier=table_name(table))


def column_target(table: Table, column_name: str) -> CommentTarget:
    """CommentTarget for one column of ``table``"""
    return CommentTarget(
        kind=ObjectKind.COLUMN,
        identifier=(column_name,),
        parent_identifier=table_name(table),
    )


class TableCommenter:
    """
    Push the ``comment=`` attributes of a SQLAlchemy Table to the database.

    Comments are normalized like any other, so they can be written as
    indented triple-quoted strings in the model definition:

        users = Table(
            "users", metadata,
            Column("email", String, comment='''
                Login address, unique per tenant.
                '''),
            comment='''
                Everyone who can sign in.
                ''',
        )

    Columns without a comment are left alone; use ``clear_missing=True`` to
    clear their stored comments instead.
    """

    def __init__(self, service: CommentService):
        self.service = service

    async def apply(
        self,
        table: Table,
        kind: ObjectKind = ObjectKind.TABLE,
        clear_missing: bool = False
    ) -> int:
        """
        Set the table comment and every column comment of ``table``.

        Returns:
            Number of statements executed
        """
        target = table_target(table, kind)
        statements = 0

        if table.comment is not None or clear_missing:
            await self.service.set_comment(target, table.comment)
            statements += 1

        for column in table.columns:
            if column.comment is None and not clear_missing:
                continue
            await self.service.set_comment(column_target(table, column.name), column.comment)
            statements += 1

        logger.info(f"Applied {statements} comment(s) for {'.'.join(table_name(table))}")
        return statements

    async def comment_for_table(
        self,
        table: Table,
        kind: ObjectKind = ObjectKind.TABLE
    ) -> Optional[str]:
        """Stored comment of the relation behind ``table``"""
        return await self.service.get_comment(table_target(table, kind))

    async def comments_for_columns(self, table: Table) -> Dict[str, Optional[str]]:
        """Stored comment of every column of ``table``, keyed by column name"""
        comments = {}
        for column in table.columns:
            comments[column.name] = await self.service.get_comment(column_target(table, column.name))
        return comments
