"""
Comments on PostgreSQL objects.

Modules:
    normalizer: strip indentation from comment text
    statement_builder: COMMENT ON statements and catalog queries
    service: execute them over an async SQLAlchemy session
    ddl: apply comments declared on SQLAlchemy Table and Column objects

Usage:
    from comments.service import CommentService
    from schemas.comment import CommentTarget
    from models.object_kind import ObjectKind

Example:
    async for session in get_session():
        service = CommentService(session)
        await service.set_comment(
            CommentTarget(kind=ObjectKind.TABLE, identifier="public.users"),
            '''
                Everyone who can sign in.
                ''',
        )
"""

from comments.normalizer import CommentNormalizer, normalize_comment
from comments.statement_builder import CommentStatementBuilder
from comments.service import CommentService
from comments.ddl import TableCommenter

__all__ = [
    "CommentNormalizer",
    "normalize_comment",
    "CommentStatementBuilder",
    "CommentService",
    "TableCommenter",
]
