from fastapi.testclient import TestClient

from app.config import DEFAULT_USERS, Settings, parse_users
from app.main import app, create_app
from models import Coordinate, TurnRecord
from services import GameStore, allocate_id

client = TestClient(app)


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_put_get_clear() -> None:
    store = GameStore()
    g1 = allocate_id(store)
    store.put(g1, TurnRecord(from_=Coordinate(0, 0), to=Coordinate(1, 1), turn=1))

    record = store.get(g1)
    assert record.turn == 1
    assert record.to == Coordinate(1, 1)
    assert record.updated_at is not None

    store.clear()
    assert store.get(g1) is None


def test_lifespan_starts_and_stops_sweeper() -> None:
    settings = Settings(
        users=parse_users(DEFAULT_USERS),
        game_expiry_seconds=60,
        sweep_interval_seconds=30,
    )
    relay = create_app(settings)
    with TestClient(relay) as test_client:
        assert test_client.get("/health").status_code == 200
        sweeper = relay.state.sweeper
        assert sweeper.running
    assert not sweeper.running


def test_lifespan_without_expiry_runs_no_sweeper() -> None:
    relay = create_app(Settings(users=parse_users(DEFAULT_USERS)))
    with TestClient(relay):
        assert relay.state.sweeper.running is False
