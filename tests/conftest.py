# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
import os

from src.application.question_bank import Category, Difficulty, Question

TEST_ENV = {
    "ENVIRONMENT": "testing",
    "DEBUG": "true",
    "APP_NAME": "Interview Simulator Test",
    "SCORING_POLICY": "fixed",
    "FIXED_SCORE": "88",
    "TICK_INTERVAL_SECONDS": "3600",
}

@pytest.fixture
def test_env_vars():
    """Set up test environment variables."""
    os.environ.update(TEST_ENV)
    yield
    # Clean up
    for key in TEST_ENV:
        os.environ.pop(key, None)

@pytest.fixture
def settings(test_env_vars):
    """Get test settings."""
    from src.core.config import get_settings
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()

@pytest.fixture
def app(settings):
    """Create test app instance."""
    from src.interface.api.main import create_app
    return create_app()

@pytest.fixture
def client(app):
    """Create test client; the context keeps one event loop alive for session clocks."""
    with TestClient(app) as client:
        yield client

@pytest.fixture
def corpus():
    return (
        Question("q1", "Tell me about yourself.", Category.GENERAL, Difficulty.EASY),
        Question("q2", "Explain how a hash map works.", Category.TECHNICAL, Difficulty.MEDIUM),
        Question("q3", "Why this role?", Category.GENERAL, Difficulty.EASY),
        Question("q4", "Design a rate limiter.", Category.TECHNICAL, Difficulty.HARD),
    )

class Boundary:
    """Records what a session reports through its terminal callbacks."""

    def __init__(self):
        self.completed = []
        self.cancelled = 0

    def on_complete(self, score, answers):
        self.completed.append((score, answers))

    def on_cancel(self):
        self.cancelled += 1

@pytest.fixture
def boundary():
    return Boundary()
