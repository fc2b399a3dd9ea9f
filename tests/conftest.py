"""Pytest fixtures for Hijri calendar and zakat service tests."""
import pytest

from hijri_zakat import create_app
from hijri_zakat.services import time_provider
from hijri_zakat.services.hijri import GregorianDate


# Fixed "today" for deterministic tests
FROZEN_TODAY = GregorianDate(2026, 1, 15)


@pytest.fixture
def app():
    """Create application for testing.

    Yields:
        Flask application configured for testing.
    """
    app = create_app({'TESTING': True})
    yield app


@pytest.fixture
def client(app):
    """Create test client.

    Yields:
        Flask test client for making requests.
    """
    with app.test_client() as client:
        yield client


@pytest.fixture
def runner(app):
    """Create CLI runner for invoking registered commands."""
    return app.test_cli_runner()


@pytest.fixture
def frozen_time():
    """Fixture that freezes time to FROZEN_TODAY (2026-01-15).

    Yields the frozen GregorianDate. The clock is unfrozen after the
    test completes.
    """
    yield time_provider.freeze(FROZEN_TODAY)
    time_provider.unfreeze()


@pytest.fixture
def frozen_today():
    """Returns the frozen date value for assertions."""
    return FROZEN_TODAY
