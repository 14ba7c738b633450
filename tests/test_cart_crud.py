"""Tests for cart and session persistence."""
from __future__ import annotations

import json
from dataclasses import dataclass, field

import pytest

from haatbazar.crud.cart_crud import InMemoryCartRepository, RedisCartRepository, deserialize_cart, serialize_cart
from haatbazar.crud.session_crud import InMemorySessionRepository, RedisSessionRepository
from haatbazar.schemas.cart_schema import LineItem
from haatbazar.schemas.user_schema import SessionUser


@dataclass
class FakeAsyncRedis:
    data: dict[str, str] = field(default_factory=dict)
    set_calls: list[str] = field(default_factory=list)

    async def get(self, key: str):
        return self.data.get(key)

    async def set(self, key: str, value: str):
        self.data[key] = value
        self.set_calls.append(key)
        return True

    async def delete(self, key: str) -> int:
        return 1 if self.data.pop(key, None) is not None else 0


def _item(product_id: str = "A", price: float = 50, quantity: int = 2, seller: str | None = "S1") -> LineItem:
    return LineItem(
        product_id=product_id,
        name="Rice",
        image=None,
        unit="kg",
        price=price,
        quantity=quantity,
        total=price * quantity,
        seller_id=seller,
    )


def test_snapshot_is_json_array_with_camel_case_keys():
    document = json.loads(serialize_cart([_item()]))

    assert isinstance(document, list)
    assert document[0]["productId"] == "A"
    assert document[0]["sellerId"] == "S1"
    assert document[0]["total"] == 100


@pytest.mark.parametrize("raw", [None, "", "not-json", "{\"a\": 1}", "42", "[{\"productId\": \"A\"}]"])
def test_unusable_snapshot_degrades_to_empty_cart(raw):
    assert deserialize_cart(raw) == []


@pytest.mark.asyncio
async def test_redis_repository_round_trip():
    redis = FakeAsyncRedis()
    repo = RedisCartRepository(redis, "abc")
    items = [_item("A"), _item("B", price=12.5, quantity=4, seller=None)]

    await repo.save(items)
    loaded = await RedisCartRepository(redis, "abc").load()

    assert redis.set_calls == ["cart:abc"]
    assert loaded == items


@pytest.mark.asyncio
async def test_redis_carts_are_keyed_by_browser():
    redis = FakeAsyncRedis()
    await RedisCartRepository(redis, "one").save([_item("A")])

    assert await RedisCartRepository(redis, "two").load() == []


@pytest.mark.asyncio
async def test_redis_repository_clear_removes_key():
    redis = FakeAsyncRedis()
    repo = RedisCartRepository(redis, "abc")
    await repo.save([_item()])

    await repo.clear()

    assert "cart:abc" not in redis.data


@pytest.mark.asyncio
async def test_redis_repository_tolerates_corrupt_value():
    redis = FakeAsyncRedis(data={"cart:abc": "[{broken"})

    assert await RedisCartRepository(redis, "abc").load() == []


@pytest.mark.asyncio
async def test_session_user_round_trip_keeps_unknown_fields():
    redis = FakeAsyncRedis()
    repo = RedisSessionRepository(redis, "abc")
    user = SessionUser.model_validate({"_id": "U1", "name": "Ayesha", "division": "Dhaka"})

    await repo.set_user(user)
    loaded = await repo.get_user()

    assert loaded.id == "U1"
    assert loaded.model_dump(by_alias=True)["division"] == "Dhaka"
    assert json.loads(redis.data["user:abc"])["_id"] == "U1"


@pytest.mark.asyncio
async def test_unreadable_session_is_treated_as_logged_out():
    redis = FakeAsyncRedis(data={"user:abc": "nope"})

    assert await RedisSessionRepository(redis, "abc").get_user() is None


def test_invalid_entry_is_dropped_without_losing_the_rest():
    good = _item("A").model_dump(by_alias=True)
    bad = dict(_item("B").model_dump(by_alias=True), quantity=0)

    loaded = deserialize_cart(json.dumps([good, bad]))

    assert [item.product_id for item in loaded] == ["A"]


@pytest.mark.asyncio
async def test_memory_store_evicts_oldest_browsers_past_its_limit():
    store: dict[str, str] = {}
    for browser in ("one", "two", "three"):
        await InMemoryCartRepository(browser, store=store, max_entries=2).save([_item()])

    assert list(store) == ["two", "three"]
    assert await InMemoryCartRepository("one", store=store, max_entries=2).load() == []


@pytest.mark.asyncio
async def test_rewriting_a_cart_makes_it_most_recent():
    store: dict[str, str] = {}
    await InMemoryCartRepository("one", store=store, max_entries=2).save([_item()])
    await InMemoryCartRepository("two", store=store, max_entries=2).save([_item()])
    await InMemoryCartRepository("one", store=store, max_entries=2).save([_item("B")])
    await InMemoryCartRepository("three", store=store, max_entries=2).save([_item()])

    assert list(store) == ["one", "three"]


@pytest.mark.asyncio
async def test_memory_sessions_are_bounded_too():
    store: dict[str, str] = {}
    for browser in ("one", "two", "three"):
        await InMemorySessionRepository(browser, store=store, max_entries=2).set_user(
            SessionUser.model_validate({"_id": browser})
        )

    assert await InMemorySessionRepository("one", store=store, max_entries=2).get_user() is None
    assert (await InMemorySessionRepository("three", store=store, max_entries=2).get_user()).id == "three"
