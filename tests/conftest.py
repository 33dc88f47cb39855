from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from fuelstations.app.main import create_app
from fuelstations.core.tokens import TokenService
from fuelstations.db.store import StationStore
from fuelstations.services.station_service import StationService

SECRET = "test-secret"


@pytest.fixture
def store() -> Iterator[StationStore]:
    store = StationStore.open()
    yield store
    store.close()


@pytest.fixture
def service(store: StationStore) -> StationService:
    return StationService(store)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(SECRET)


@pytest.fixture
def client(store: StationStore, tokens: TokenService) -> Iterator[TestClient]:
    with TestClient(create_app(store=store, tokens=tokens)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(tokens: TokenService) -> dict[str, str]:
    return {"Authorization": f"Bearer {tokens.issue('tester')}"}


def station_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id_name": "MIGROL_100041",
        "name": "Migrol Tankstelle",
        "latitude": 47.3943939,
        "longitude": 8.52981,
        "city": "Zurich",
        "address": "Scheffelstrasse 16",
    }
    payload.update(overrides)
    return payload
