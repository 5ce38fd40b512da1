"""Root test fixtures shared across all test types.

Environment variables are set before any application import so settings,
the password hasher and the rate limiter are built for the test environment.
Database fixtures live in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./scrum-test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
# Cheap hashing keeps factories fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "8")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest
import structlog
from structlog.testing import CapturingLogger

from src.scrum.core.config import get_settings
from src.scrum.core.logging import clear_request_context

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def capturing_logger():
    """Route structlog output to an in-memory logger for the duration of a test."""
    cap_logger = CapturingLogger()
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)
