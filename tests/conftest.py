"""Shared pytest fixtures for codec, pipeline, and delivery tests.

Centralizes test infrastructure following clean architecture principles:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from lib_layered_config import Config

from elastic_email_adapter.adapters.elastic.config import ElasticEmailConfig
from elastic_email_adapter.adapters.memory.transport import CapturedRequest, TransportSpy
from elastic_email_adapter.application.ports import TransportResponse
from elastic_email_adapter.domain.message import Email, new_email

_COVERAGE_BASENAME = ".coverage.elastic_email_adapter"

TEST_API_KEY = "123_abc"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a **local** temp directory.

    coverage.py stores trace data in SQLite, which needs POSIX locking that
    network mounts do not reliably provide. Runs before ``pytest-cov``
    creates its ``Coverage()`` object.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()


@pytest.fixture
def api_key() -> str:
    """The literal API key used by test configurations."""
    return TEST_API_KEY


@pytest.fixture
def elastic_config() -> ElasticEmailConfig:
    """Provide a valid config pointing at a local fake endpoint.

    Example:
        def test_send(elastic_config: ElasticEmailConfig) -> None:
            assert elastic_config.resolve_api_key() == "123_abc"
    """
    return ElasticEmailConfig(api_key=TEST_API_KEY, base_url="http://localhost:4000")


@pytest.fixture
def transport_spy() -> TransportSpy:
    """Provide a fresh TransportSpy that answers 200 ``SENT``."""
    return TransportSpy()


def _reject_invalid_sender(request: CapturedRequest) -> TransportResponse:
    if request.params.get("from") == ["INVALID_EMAIL"]:
        return TransportResponse(status_code=500, body="Error!!")
    return TransportResponse(status_code=200, body="SENT")


@pytest.fixture
def fake_elastic_email() -> TransportSpy:
    """Provide a spy behaving like the Elastic Email API.

    Answers 500 ``Error!!`` when the sender is ``INVALID_EMAIL`` and
    200 ``SENT`` otherwise.
    """
    return TransportSpy(responder=_reject_invalid_sender)


@pytest.fixture
def email_factory() -> Callable[..., Email]:
    """Return a builder for emails with a default sender and no recipients.

    Example:
        def test_from(email_factory: Callable[..., Email]) -> None:
            email = email_factory(subject="Hi")
            assert email.from_ == (None, "foo@bar.com")
    """

    def _factory(**attrs: Any) -> Email:
        fields: dict[str, Any] = {"from_": "foo@bar.com", "to": []}
        fields.update(attrs)
        return new_email(**fields)

    return _factory


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before each test.

    Only clears before, not after, to avoid errors when the function has
    been monkeypatched during the test (losing its cache_clear method).
    """
    from elastic_email_adapter.adapters.config import loader as config_loader

    config_loader.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from raw dictionaries.

    Example:
        def test_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"elastic_email": {"api_key": "k"}})
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory
