# tests/test_config.py
import pytest
from pydantic import ValidationError

from ticketdesk.core.config import Settings
from ticketdesk.core.errors import (
    EmptyUpdate,
    MalformedIdentifier,
    StoreUnavailable,
    TicketNotFound,
    TicketValidationError,
    status_code_for,
)


def test_production_requires_mongodb_uri():
    with pytest.raises(ValidationError):
        Settings(ENVIRONMENT="production", MONGODB_URI=None, _env_file=None)


def test_production_with_uri_hides_error_details():
    settings = Settings(ENVIRONMENT="production", MONGODB_URI="mongodb://db:27017", _env_file=None)
    assert settings.is_production
    assert not settings.expose_error_details


def test_development_allows_missing_uri():
    settings = Settings(ENVIRONMENT="development", MONGODB_URI=None, _env_file=None)
    assert settings.MONGODB_URI is None
    assert settings.expose_error_details


def test_cors_origins_are_split():
    settings = Settings(CORS_ORIGINS="http://a.test, http://b.test,", _env_file=None)
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize(
    "error, status",
    [
        (TicketValidationError({"title": "too short"}), 400),
        (MalformedIdentifier(), 400),
        (EmptyUpdate(), 400),
        (TicketNotFound(), 404),
        (StoreUnavailable(), 500),
    ],
)
def test_error_status_table(error, status):
    assert status_code_for(error) == status
