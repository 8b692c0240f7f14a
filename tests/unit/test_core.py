"""
Unit tests for configuration, sessions, logging and exceptions
"""

import logging
import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from core.config import Settings, settings
from core.database import create_engine_from_settings, create_session_maker, get_session
from core.exceptions import (
    CommentError,
    ConfigurationError,
    InvalidTargetError,
    MissingParentError,
    UnknownObjectKindError,
)
from core.logging import setup_logging


class TestSettings:
    """Test environment-driven settings"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("COMMENT_AUTOCOMMIT", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("SQL_ECHO", raising=False)

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL.startswith("postgresql+asyncpg://")
        assert settings.COMMENT_AUTOCOMMIT is True
        assert settings.LOG_LEVEL == "INFO"
        assert settings.SQL_ECHO is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("COMMENT_AUTOCOMMIT", "false")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.COMMENT_AUTOCOMMIT is False
        assert settings.LOG_LEVEL == "DEBUG"


class TestDatabase:
    """Test engine and session factories"""

    def test_engine_does_not_echo_by_default(self):
        engine = create_engine_from_settings("postgresql+asyncpg://u:p@localhost/db")

        assert engine.echo is False
        assert engine.url.database == "db"

    def test_echo_override(self):
        engine = create_engine_from_settings("postgresql+asyncpg://u:p@localhost/db", echo=True)

        assert engine.echo is True

    def test_session_maker_bound_to_engine(self):
        engine = create_engine_from_settings("postgresql+asyncpg://u:p@localhost/db")

        session = create_session_maker(engine)()

        assert isinstance(session, AsyncSession)
        assert session.bind is engine

    @pytest.mark.asyncio
    async def test_get_session_yields_async_session(self):
        """Creating a session does not open a connection"""
        async for session in get_session("postgresql+asyncpg://u:p@localhost/db"):
            assert isinstance(session, AsyncSession)


class TestLogging:
    """Test logging setup"""

    def test_sqlalchemy_quieted(self):
        setup_logging()

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.pool").level == logging.WARNING

    def test_level_override_applies_to_comment_loggers(self):
        setup_logging("debug")

        assert logging.getLogger("comments").level == logging.DEBUG
        assert logging.getLogger("comments.statement_builder").isEnabledFor(logging.DEBUG)

        setup_logging("INFO")

        assert logging.getLogger("comments").level == logging.INFO

    def test_sql_echo_leaves_engine_logger(self, monkeypatch):
        monkeypatch.setattr(settings, "SQL_ECHO", True)
        engine_logger = logging.getLogger("sqlalchemy.engine")
        monkeypatch.setattr(engine_logger, "level", logging.INFO)

        setup_logging()

        assert engine_logger.level == logging.INFO

    def test_announces_configuration(self, caplog):
        with caplog.at_level(logging.INFO, logger="core.logging"):
            setup_logging("INFO")

        assert "pg-comment logging at INFO: statements hidden" in caplog.text


class TestExceptions:
    """Test the exception hierarchy"""

    @pytest.mark.parametrize("error_class", [
        UnknownObjectKindError,
        MissingParentError,
        InvalidTargetError,
    ])
    def test_all_are_configuration_errors(self, error_class):
        assert issubclass(error_class, ConfigurationError)
        assert issubclass(error_class, CommentError)

    def test_str_includes_context(self):
        error = MissingParentError("A column needs its table", context={"kind": "column"})

        text = str(error)

        assert text.startswith("MissingParentError: A column needs its table")
        assert "kind=column" in text

    def test_to_dict(self):
        cause = ValueError("bad")
        error = UnknownObjectKindError("Unknown object kind", context={"kind": "bogus"}, original_exception=cause)

        data = error.to_dict()

        assert data["error_type"] == "UnknownObjectKindError"
        assert data["context"]["kind"] == "bogus"
        assert data["original_error"] == "bad"
        assert error.__cause__ is cause
