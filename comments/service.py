"""
Set and read PostgreSQL object comments over an async SQLAlchemy session
"""

from typing import Any, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from comments.normalizer import CommentNormalizer
from comments.statement_builder import CommentStatementBuilder
from schemas.comment import CommentTarget
from core.config import settings
import logging

logger = logging.getLogger(__name__)


class CommentService:
    """
    Set, clear and read comments on database objects.

    The session is the execution channel; the service never opens
    connections or begins transactions of its own. Errors raised by the
    database propagate unchanged and nothing is retried.
    """

    def __init__(
        self,
        db_session: AsyncSession,
        builder: Optional[CommentStatementBuilder] = None,
        normalizer: Optional[CommentNormalizer] = None,
        autocommit: Optional[bool] = None
    ):
        self.db = db_session
        self.builder = builder or CommentStatementBuilder()
        self.normalizer = normalizer or CommentNormalizer()
        self.autocommit = settings.COMMENT_AUTOCOMMIT if autocommit is None else autocommit

    async def set_comment(self, target: CommentTarget, comment: Optional[str]) -> str:
        """
        Set the comment on ``target``; ``None`` clears it.

        Args:
            target: Object to comment on
            comment: Raw comment text, normalized before it is stored

        Returns:
            The statement that was executed
        """
        text = None if comment is None else self.normalizer.normalize(comment)
        sql = self.builder.build_set(target, text)

        await self._execute(sql)
        if self.autocommit:
            await self.db.commit()

        if text is None:
            logger.info(f"Cleared comment on {target.describe()}")
        else:
            logger.info(f"Set comment on {target.describe()} ({len(text)} chars)")
        return sql

    async def clear_comment(self, target: CommentTarget) -> str:
        """Remove the comment on ``target``"""
        return await self.set_comment(target, None)

    async def get_comment(self, target: CommentTarget) -> Optional[str]:
        """
        Read the comment stored for ``target``.

        Returns:
            The comment text, or None when there is no comment (or no object)
        """
        result = await self._execute(self.builder.build_get(target))
        return result.scalar()

    async def resolve_oid(self, target: CommentTarget) -> Optional[int]:
        """OID of ``target`` (the owning relation for a column), or None"""
        result = await self._execute(self.builder.build_resolve(target))
        oid = result.scalar()
        return None if oid is None else int(oid)

    async def object_exists(self, target: CommentTarget) -> bool:
        """True when ``target`` exists in the connected database"""
        return await self.resolve_oid(target) is not None

    async def _execute(self, sql: str) -> Any:
        # no_parameters keeps '%' and ':' in comment text away from the driver's paramstyle
        logger.debug(f"Executing: {sql}")
        connection = await self.db.connection()
        return await connection.exec_driver_sql(
            sql,
            execution_options={"no_parameters": True}
        )
