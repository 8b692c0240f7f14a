"""
Unit tests for comments declared on SQLAlchemy tables
"""

import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table
from comments.ddl import TableCommenter, column_target, table_target
from comments.service import CommentService
from core.exceptions import ConfigurationError, InvalidTargetError
from models.object_kind import ObjectKind


@pytest.fixture
def users_table():
    metadata = MetaData()
    return Table(
        "users", metadata,
        Column("id", Integer, primary_key=True),
        Column("email", String(255), comment="""
            Login address.
            """),
        Column("Display Name", String(100), comment="Shown to other users"),
        comment="""
            Everyone who can sign in.
            """,
        schema="public",
    )


class TestTargets:
    """Test targets derived from tables"""

    def test_table_target(self, users_table):
        target = table_target(users_table)

        assert target.kind is ObjectKind.TABLE
        assert target.identifier == ("public", "users")

    def test_view_target(self, users_table):
        assert table_target(users_table, ObjectKind.VIEW).kind is ObjectKind.VIEW

    def test_non_relation_kind_rejected(self, users_table):
        with pytest.raises(InvalidTargetError) as exc_info:
            table_target(users_table, ObjectKind.FUNCTION)

        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.context == {"kind": "function", "table": "users"}

    def test_column_target_without_schema(self):
        table = Table("orders", MetaData(), Column("total", Integer))

        target = column_target(table, "total")

        assert target.parent_identifier == ("orders",)
        assert target.identifier == ("total",)


class TestTableCommenter:
    """Test applying declared comments"""

    @pytest.mark.asyncio
    async def test_apply(self, users_table, mock_session, executed):
        """Table and commented columns are set, uncommented columns skipped"""
        commenter = TableCommenter(CommentService(mock_session, autocommit=True))

        count = await commenter.apply(users_table)

        assert count == 3
        assert executed() == [
            "COMMENT ON TABLE public.users IS 'Everyone who can sign in.'",
            "COMMENT ON COLUMN public.users.email IS 'Login address.'",
            "COMMENT ON COLUMN public.users.\"Display Name\" IS 'Shown to other users'",
        ]

    @pytest.mark.asyncio
    async def test_apply_clear_missing(self, users_table, mock_session, executed):
        """clear_missing also clears columns without a comment"""
        commenter = TableCommenter(CommentService(mock_session))

        count = await commenter.apply(users_table, clear_missing=True)

        assert count == 4
        assert "COMMENT ON COLUMN public.users.id IS NULL" in executed()

    @pytest.mark.asyncio
    async def test_apply_as_view(self, mock_session, executed):
        view = Table("active_users", MetaData(), Column("id", Integer), comment="Active only")
        commenter = TableCommenter(CommentService(mock_session))

        await commenter.apply(view, kind=ObjectKind.VIEW)

        assert executed() == ["COMMENT ON VIEW active_users IS 'Active only'"]

    @pytest.mark.asyncio
    async def test_apply_rejects_non_relation_kind(self, mock_session, executed):
        """Nothing is executed, not even the column comments"""
        table = Table("orders", MetaData(), Column("total", Integer, comment="Gross"))
        commenter = TableCommenter(CommentService(mock_session))

        with pytest.raises(InvalidTargetError):
            await commenter.apply(table, kind=ObjectKind.SEQUENCE)

        assert executed() == []

    @pytest.mark.asyncio
    async def test_comments_for_columns(self, users_table, mock_session, mock_result):
        mock_result.scalar.return_value = "stored"
        commenter = TableCommenter(CommentService(mock_session))

        comments = await commenter.comments_for_columns(users_table)

        assert comments == {"id": "stored", "email": "stored", "Display Name": "stored"}

    @pytest.mark.asyncio
    async def test_comment_for_table(self, users_table, mock_session, mock_result, executed):
        mock_result.scalar.return_value = "Everyone who can sign in."
        commenter = TableCommenter(CommentService(mock_session))

        assert await commenter.comment_for_table(users_table) == "Everyone who can sign in."
        assert executed() == ["SELECT obj_description(to_regclass('public.users')::oid, 'pg_class')"]
