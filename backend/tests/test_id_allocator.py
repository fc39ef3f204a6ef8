from __future__ import annotations

import itertools

import pytest

from services.errors import AllocatorExhausted
from services.id_allocator import MAX_ATTEMPTS, allocate_id, generate_game_id
from services.store import GameStore


def test_generated_ids_are_url_safe_and_fixed_length() -> None:
    for _ in range(50):
        game_id = generate_game_id()
        assert len(game_id) == 8
        assert all(c.isalnum() or c in "-_" for c in game_id)


def test_allocate_never_repeats() -> None:
    store = GameStore()
    ids = [allocate_id(store) for _ in range(500)]
    assert len(set(ids)) == len(ids)
    assert len(store) == 500


def test_allocate_reserves_empty_record() -> None:
    store = GameStore()
    game_id = allocate_id(store)
    reserved = store.get(game_id)
    assert reserved is not None
    assert reserved.updated_at is None


def test_allocate_retries_past_collisions() -> None:
    store = GameStore()
    store.reserve("taken-1")
    store.reserve("taken-2")
    candidates = iter(["taken-1", "taken-2", "free"])

    assert allocate_id(store, generator=lambda: next(candidates)) == "free"


def test_allocate_raises_when_exhausted() -> None:
    store = GameStore()
    store.reserve("same")
    calls = itertools.count()

    def always_same() -> str:
        next(calls)
        return "same"

    with pytest.raises(AllocatorExhausted) as exc_info:
        allocate_id(store, generator=always_same)

    assert exc_info.value.attempts == MAX_ATTEMPTS
    assert next(calls) == MAX_ATTEMPTS
