import pytest
import inspect
from httpx import AsyncClient, ASGITransport

from delivery_quote.main import app
from delivery_quote.core.security import create_access_token, hash_password
from delivery_quote.core.config import settings
from delivery_quote.core.enums import UserRole
from delivery_quote.schemas.tariff import TariffConfig
from delivery_quote.services.distance import get_distance_client
from delivery_quote.services.notifier import get_notifier
from delivery_quote.services.tariff_store import TariffStore


ADMIN_PASSWORD = "s3cret-pass"


class FakeDistanceClient:
    def __init__(self, distance_km: float = 8.0, error: Exception | None = None):
        self.distance_km = distance_km
        self.error = error
        self.calls = []

    async def get_distance_km(self, origin: str, destination: str) -> float:
        self.calls.append((origin, destination))
        if self.error is not None:
            raise self.error
        return self.distance_km


class FakeNotifier:
    def __init__(self):
        self.sent = []

    async def send_quote(self, quote, customer_name, customer_email) -> bool:
        self.sent.append((quote, customer_name, customer_email))
        return True


@pytest.fixture
def default_tariff():
    return TariffConfig()


@pytest.fixture
def tariff_file(tmp_path):
    return tmp_path / "tariff.json"


@pytest.fixture
def tariff_store(tariff_file):
    store = TariffStore(tariff_file)
    store.load()
    return store


@pytest.fixture
def distance_client():
    return FakeDistanceClient()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
async def test_client(tariff_store, distance_client, notifier):
    app.state.tariff_store = tariff_store
    app.dependency_overrides[get_distance_client] = lambda: distance_client
    app.dependency_overrides[get_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_password(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", hash_password(ADMIN_PASSWORD))
    return ADMIN_PASSWORD


@pytest.fixture
def admin_token():
    return create_access_token(settings.ADMIN_USERNAME, UserRole.ADMIN)


@pytest.fixture
def viewer_token():
    return create_access_token("viewer", "viewer")


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def valid_quote_data():
    return {
        "origin": "Av. Providencia 1234, Santiago",
        "destination": "Av. Apoquindo 4500, Las Condes",
    }


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "api: marks tests that go through the HTTP layer"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "hours: marks tests related to business-hours advisories"
    )
    config.addinivalue_line(
        "markers", "tariff: marks tests related to tariff storage"
    )
    config.addinivalue_line(
        "markers", "email: marks tests related to quote emails"
    )
    config.addinivalue_line(
        "markers", "auth: marks tests related to authentication"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
