"""
Pytest configuration for MetaGuard tests.

Provides:
- Shared fixtures (app, client) built from sample_app
- make_context factory for driving guards without Flask
"""

import pytest

from metaguard.sources import RequestContext
from sample_app import create_app


@pytest.fixture
def app():
    """Create test Flask application."""
    return create_app()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_context():
    """Factory for RequestContext objects with the given source maps."""
    def _make(**sources):
        return RequestContext(**sources)
    return _make
