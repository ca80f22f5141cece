from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from app import create_app
from settings import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(cors_origins=["http://localhost:5173"])


@pytest.fixture()
def client(settings: Settings) -> FlaskClient:
    flask_app = create_app(settings)
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as test_client:
        yield test_client
