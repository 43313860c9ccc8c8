"""Shared test fixtures for the mdblocks test suite."""

from __future__ import annotations

import pytest

from mdblocks.config import DocumentConfig
from mdblocks.document import MarkdownDocument
from mdblocks.observability import InMemoryMetricsHook


@pytest.fixture
def config() -> DocumentConfig:
    """Default document configuration."""
    return DocumentConfig()


@pytest.fixture
def document(config: DocumentConfig) -> MarkdownDocument:
    """Empty document using the default test config."""
    return MarkdownDocument(config=config)


@pytest.fixture
def metrics() -> InMemoryMetricsHook:
    """Fresh recording metrics backend."""
    return InMemoryMetricsHook()
