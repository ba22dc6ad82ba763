# tests/conftest.py
from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from propextract.market.rent_benchmarks import RentBenchmarkCache
from tests.utils import (
    CountingLoader,
    make_dataset,
    make_page,
    make_property,
    write_dataset,
)


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Settings and logging read PROPX_* variables; never leak them between tests."""
    for key in list(os.environ):
        if key.startswith("PROPX_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """configure_logging() is idempotent per process; start each test without handlers."""
    logger = logging.getLogger("propextract")
    saved = list(logger.handlers)
    yield
    for h in list(logger.handlers):
        if h not in saved:
            logger.removeHandler(h)
            h.close()


# -------- Pages --------
@pytest.fixture
def listing_html():
    """Factory for listing pages with an embedded blob (overridable property fields)."""

    def _factory(*, body: str = "", head: str = "", **overrides):
        return make_page(make_property(**overrides), body=body, head=head)

    return _factory


# -------- Benchmarks --------
@pytest.fixture
def sample_dataset():
    return make_dataset()


@pytest.fixture
def counting_loader(sample_dataset):
    return CountingLoader(sample_dataset)


@pytest.fixture
def benchmark_cache(counting_loader):
    """RentBenchmarkCache backed by the in-memory sample dataset."""
    return RentBenchmarkCache(counting_loader)


@pytest.fixture
def dataset_file(tmp_path: Path, sample_dataset) -> Path:
    return write_dataset(tmp_path, sample_dataset)


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")
