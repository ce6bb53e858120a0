"""
Pytest configuration and shared fixtures for live-validate tests.
"""

import pytest
from faker import Faker

from live_validate import Session

fake = Faker()

FEEDBACK = "validation_feedback"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests run against built-in defaults unless they set variables themselves."""
    for name in ("VALIDATOR_PRIORITY", "VALIDATION_MESSAGE_TYPE", "VALIDATION_INIT_MESSAGE_TYPE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def session():
    """A fresh reactive session, closed after the test."""
    s = Session()
    yield s
    s.close()


@pytest.fixture
def sample_data():
    """Provide sample form data for tests."""
    return {
        "name": fake.name(),
        "email": fake.email(),
        "company": fake.company(),
    }


def required(value, message="This field is required"):
    if value is None or value == "" or value == [] or value is False:
        return message
    return None


def feedback_messages(session):
    return session.messages_of_type(FEEDBACK)
