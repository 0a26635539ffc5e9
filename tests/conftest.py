"""
Pytest configuration for digest tests.

Resets the context-held logging configuration between tests and provides
digest fixtures that do not depend on the process environment.
"""

import pytest

from typing import Generator

from hyperdigest.digest import Digest, DigestConfig
from hyperdigest.logging import LoggingConfig


@pytest.fixture(autouse=True)
def reset_logging_config() -> Generator[LoggingConfig, None, None]:
    config = LoggingConfig()
    config.reset()
    yield config
    config.reset()


@pytest.fixture
def digest_config() -> DigestConfig:
    return DigestConfig()


@pytest.fixture
def uniform_digest(digest_config: DigestConfig) -> Digest:
    """Digest of the unit-weight values 1..1000 bounded at 100 centroids."""
    return Digest.from_values(range(1, 1001), max_size=100, config=digest_config)


@pytest.fixture
def empty_digest(digest_config: DigestConfig) -> Digest:
    return Digest.with_size(100, config=digest_config)
