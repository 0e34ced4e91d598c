"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path

from ejson.keys import generate_keypair


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def keypair():
    """A fresh keypair."""
    return generate_keypair()


@pytest.fixture
def other_keypair():
    """A second, unrelated keypair."""
    return generate_keypair()


@pytest.fixture
def sample_secrets():
    """Nested secrets document with mixed scalar types."""
    return {
        "database": {
            "host": "db.example.com",
            "port": 5432,
            "username": "admin",
            "password": "super_secret_password",
            "ssl": True,
            "replica": None,
        },
        "api_keys": {
            "stripe": "sk_live_51ABC123",
            "twilio": "AC1234567890abcdef",
        },
        "hosts": ["a.example.com", "b.example.com", 7, 2.5, False],
        "ratio": 0.1,
        "empty": "",
        "unicode": "Привет, 世界 🌍",
    }
