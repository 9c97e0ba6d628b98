"""Unit tests for the logging decorator."""

import logging

import pytest

from repochain.core.decorators import LoggingRepository, RepositoryDecorator
from repochain.core.exceptions import EntityNotFoundError, StoreError
from repochain.core.repositories import InMemoryRepository


@pytest.mark.core
@pytest.mark.tra("Decorator.Logging")
@pytest.mark.tier(0)
class TestLoggingRepository:
    """LoggingRepository logs outcomes and never changes them."""

    def test_get_logs_found(self, widget, caplog) -> None:
        repo = LoggingRepository(InMemoryRepository([widget]))

        with caplog.at_level(logging.DEBUG, logger="repochain"):
            assert repo.get(1) == widget

        assert "get(1): found" in caplog.text

    def test_get_not_found_is_logged_and_reraised(self, caplog) -> None:
        repo = LoggingRepository(InMemoryRepository())

        with caplog.at_level(logging.DEBUG, logger="repochain"):
            with pytest.raises(EntityNotFoundError):
                repo.get("missing")

        assert "get('missing'): not found" in caplog.text

    def test_collaborator_failure_is_reraised_unchanged(self, failing, caplog) -> None:
        error = StoreError("down", location="db")
        repo = LoggingRepository(failing(error))

        with caplog.at_level(logging.DEBUG, logger="repochain"):
            with pytest.raises(StoreError) as exc_info:
                repo.get(1)

        assert exc_info.value is error
        assert "failed with StoreError" in caplog.text

    def test_add_logs_and_delegates(self, widget, caplog) -> None:
        inner = InMemoryRepository()
        repo = LoggingRepository(inner)

        with caplog.at_level(logging.DEBUG, logger="repochain"):
            repo.add(widget)

        assert inner.entities == (widget,)
        assert "add(1): stored" in caplog.text

    def test_add_failure_is_reraised(self, widget, failing) -> None:
        error = StoreError("down", location="db")

        with pytest.raises(StoreError) as exc_info:
            LoggingRepository(failing(error)).add(widget)

        assert exc_info.value is error

    def test_custom_logger_and_level(self, widget, caplog) -> None:
        custom = logging.getLogger("app.repositories")
        repo = LoggingRepository(InMemoryRepository([widget]), log=custom, level=logging.INFO)

        with caplog.at_level(logging.INFO, logger="app.repositories"):
            repo.get(1)

        (record,) = caplog.records
        assert record.name == "app.repositories"
        assert record.levelno == logging.INFO


@pytest.mark.core
@pytest.mark.tier(0)
def test_plain_decorator_delegates_both_operations(widget) -> None:
    """RepositoryDecorator is a transparent base for custom decorators."""
    inner = InMemoryRepository()
    repo = RepositoryDecorator(inner)

    repo.add(widget)

    assert repo.get(1) is widget
    assert inner.get(1) is widget
