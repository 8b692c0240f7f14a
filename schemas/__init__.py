"""
Pydantic schemas for comment targets.

Schemas:
    comment: CommentTarget, the kind and name of the object being commented

Usage:
    from schemas.comment import CommentTarget
    from models.object_kind import ObjectKind

Example:
    target = CommentTarget(
        kind=ObjectKind.COLUMN,
        identifier="email",
        parent_identifier="public.users",
    )
"""

from schemas.comment import CommentTarget

__all__ = [
    "CommentTarget",
]
