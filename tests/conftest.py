import pytest

from tabsettle.app import create_app
from tabsettle.config import Settings
from tabsettle.settlement import Participant


@pytest.fixture
def app():
    """Return a Flask app wired with test settings."""
    app = create_app(Settings(APP_NAME="tabsettle-test", CORS_ORIGINS="http://localhost:3000"))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Return a test client for the app."""
    return app.test_client()


@pytest.fixture
def beach_trip():
    """Five friends sharing a 28000 bill, one of whom fronted most of it."""
    return [
        Participant("A", paid=15500, owed=5600),
        Participant("B", paid=3500, owed=5600),
        Participant("C", paid=5000, owed=5600),
        Participant("D", paid=4000, owed=5600),
        Participant("E", paid=0, owed=5600),
    ]
