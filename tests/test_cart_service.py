"""Tests for the cart engine."""
from __future__ import annotations

import pytest

from conftest import make_product
from haatbazar.crud.cart_crud import InMemoryCartRepository
from haatbazar.services.cart_service import CartService


@pytest.mark.asyncio
async def test_adding_same_product_twice_merges_quantities(cart_repository):
    cart = await CartService.load(cart_repository)
    product = make_product("A", 50)

    await cart.add_to_cart(product, 1)
    await cart.add_to_cart(product, 2)

    assert len(cart.items) == 1
    item = cart.items[0]
    assert item.quantity == 3
    assert item.total == 150
    assert cart.get_cart_total() == 150


@pytest.mark.asyncio
async def test_repeated_adds_keep_total_equal_to_price_times_quantity(cart_repository):
    cart = await CartService.load(cart_repository)
    product = make_product("A", 12.5)

    for quantity in (1, 4, 2, 7):
        await cart.add_to_cart(product, quantity)

    item = cart.items[0]
    assert item.quantity == 14
    assert item.total == pytest.approx(item.price * item.quantity)


@pytest.mark.asyncio
async def test_new_item_copies_display_attributes(cart_repository):
    cart = await CartService.load(cart_repository)

    await cart.add_to_cart(make_product("P1", 30, name="Potato", seller="S9"), 2)

    item = cart.items[0]
    assert item.product_id == "P1"
    assert item.name == "Potato"
    assert item.unit == "kg"
    assert item.image == "https://img.example/P1.jpg"
    assert item.price == 30
    assert item.seller_id == "S9"


@pytest.mark.asyncio
async def test_populated_seller_object_is_stored_as_bare_id(cart_repository):
    cart = await CartService.load(cart_repository)

    await cart.add_to_cart(make_product("P1", 30, seller={"_id": "S7", "name": "Karim"}), 1)

    assert cart.items[0].seller_id == "S7"


@pytest.mark.asyncio
async def test_totals_and_counts_sum_over_items(cart_repository):
    cart = await CartService.load(cart_repository)
    await cart.add_to_cart(make_product("A", 10), 2)
    await cart.add_to_cart(make_product("B", 5.5), 4)
    await cart.add_to_cart(make_product("C", 100), 1)

    assert cart.get_cart_total() == sum(item.total for item in cart.items) == 142
    assert cart.get_cart_items_count() == sum(item.quantity for item in cart.items) == 7


@pytest.mark.asyncio
async def test_empty_cart_has_zero_total_and_count(cart_repository):
    cart = await CartService.load(cart_repository)

    assert cart.items == []
    assert cart.get_cart_total() == 0
    assert cart.get_cart_items_count() == 0


@pytest.mark.asyncio
async def test_remove_missing_product_leaves_cart_unchanged(cart_repository):
    cart = await CartService.load(cart_repository)
    await cart.add_to_cart(make_product("A", 10), 2)
    before = [item.model_dump() for item in cart.items]

    await cart.remove_from_cart("does-not-exist")

    assert [item.model_dump() for item in cart.items] == before


@pytest.mark.asyncio
async def test_remove_deletes_only_matching_item(cart_repository):
    cart = await CartService.load(cart_repository)
    await cart.add_to_cart(make_product("A", 10), 1)
    await cart.add_to_cart(make_product("B", 20), 1)

    await cart.remove_from_cart("A")

    assert [item.product_id for item in cart.items] == ["B"]


@pytest.mark.asyncio
async def test_update_quantity_is_reflected_in_total_immediately(cart_repository):
    cart = await CartService.load(cart_repository)
    await cart.add_to_cart(make_product("A", 40), 1)

    await cart.update_quantity("A", 5)

    assert cart.items[0].total == 200
    assert cart.get_cart_total() == 200
    assert cart.get_cart_items_count() == 5


@pytest.mark.asyncio
async def test_update_quantity_for_missing_product_is_noop(cart_repository):
    cart = await CartService.load(cart_repository)
    await cart.add_to_cart(make_product("A", 40), 1)

    await cart.update_quantity("B", 9)

    assert cart.get_cart_items_count() == 1


@pytest.mark.asyncio
async def test_clear_cart_empties_collection_and_snapshot(cart_repository):
    cart = await CartService.load(cart_repository)
    await cart.add_to_cart(make_product("A", 40), 1)

    await cart.clear_cart()

    assert cart.items == []
    assert await cart_repository.load() == []


@pytest.mark.asyncio
async def test_every_mutation_persists_whole_cart(cart_store, cart_repository):
    cart = await CartService.load(cart_repository)

    await cart.add_to_cart(make_product("A", 10), 1)
    assert '"productId": "A"' in cart_store["browser-1"]

    await cart.update_quantity("A", 3)
    assert '"quantity": 3' in cart_store["browser-1"]

    await cart.remove_from_cart("A")
    assert cart_store["browser-1"] == "[]"


@pytest.mark.asyncio
async def test_reload_after_refresh_restores_equal_cart(cart_store):
    cart = await CartService.load(InMemoryCartRepository("browser-1", store=cart_store))
    await cart.add_to_cart(make_product("A", 50, seller="S1"), 2)
    await cart.add_to_cart(make_product("B", 20, seller=None), 1)

    reloaded = await CartService.load(InMemoryCartRepository("browser-1", store=cart_store))

    assert reloaded.items == cart.items
    assert reloaded.get_cart_total() == cart.get_cart_total()


@pytest.mark.asyncio
async def test_corrupt_snapshot_loads_as_empty_cart():
    store = {"browser-1": "{not json"}

    cart = await CartService.load(InMemoryCartRepository("browser-1", store=store))

    assert cart.items == []
    assert cart.get_cart_total() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -3])
async def test_non_positive_update_is_ignored_and_reload_keeps_cart(cart_store, quantity):
    cart = await CartService.load(InMemoryCartRepository("browser-1", store=cart_store))
    await cart.add_to_cart(make_product("A", 10), 2)
    await cart.add_to_cart(make_product("B", 5), 1)

    await cart.update_quantity("A", quantity)

    assert cart.get_cart_items_count() == 3
    assert cart.get_cart_total() == 25
    reloaded = await CartService.load(InMemoryCartRepository("browser-1", store=cart_store))
    assert reloaded.items == cart.items


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -5])
async def test_non_positive_add_is_ignored(cart_store, quantity):
    cart = await CartService.load(InMemoryCartRepository("browser-1", store=cart_store))
    await cart.add_to_cart(make_product("A", 10), 2)

    await cart.add_to_cart(make_product("A", 10), quantity)
    await cart.add_to_cart(make_product("C", 10), quantity)

    assert [(item.product_id, item.quantity) for item in cart.items] == [("A", 2)]
    assert cart.get_cart_total() == 20
    reloaded = await CartService.load(InMemoryCartRepository("browser-1", store=cart_store))
    assert reloaded.get_cart_items_count() == 2
