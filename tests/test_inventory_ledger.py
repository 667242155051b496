from concurrent.futures import ThreadPoolExecutor

import pytest

from services.inventory_service.ledger import DEFAULT_STOCK, InventoryLedger


@pytest.mark.parametrize("item", ["unicorn", "", "laptops", "desk"])
@pytest.mark.parametrize("quantity", [1, 5, 1000])
def test_unknown_items_are_never_available(item, quantity):
    assert InventoryLedger().check_availability(item, quantity) is False


def test_known_item_available_up_to_stock():
    ledger = InventoryLedger()
    assert ledger.check_availability("laptop", 50) is True
    assert ledger.check_availability("laptop", 51) is False


def test_lookup_is_case_insensitive():
    ledger = InventoryLedger()
    assert ledger.check_availability("LapTop", 10) is True
    ledger.reserve("LAPTOP", 10)
    assert ledger.available("laptop") == 40


def test_reserve_full_stock_then_nothing_left():
    ledger = InventoryLedger()
    reservation = ledger.reserve("laptop", 50)

    assert reservation.quantity_deducted == 50
    assert reservation.remaining == 0
    assert ledger.check_availability("laptop", 1) is False


def test_reserve_clamps_at_zero():
    ledger = InventoryLedger()
    ledger.reserve("laptop", 40)

    reservation = ledger.reserve("laptop", 999)

    assert reservation.remaining == 0
    assert reservation.quantity_deducted == 10
    assert ledger.available("laptop") == 0


def test_reserve_unknown_item_creates_no_entry():
    ledger = InventoryLedger()
    reservation = ledger.reserve("unicorn", 3)

    assert reservation.quantity_deducted == 0
    assert "unicorn" not in ledger.snapshot()


def test_reserve_if_available_rejects_without_mutating():
    ledger = InventoryLedger()
    assert ledger.reserve_if_available("tablet", 31) is None
    assert ledger.available("tablet") == 30

    reservation = ledger.reserve_if_available("tablet", 30)
    assert reservation.remaining == 0


def test_release_returns_units_for_known_items_only():
    ledger = InventoryLedger()
    ledger.reserve("monitor", 5)
    ledger.release("monitor", 5)
    ledger.release("unicorn", 5)

    assert ledger.available("monitor") == 25
    assert "unicorn" not in ledger.snapshot()


def test_instances_do_not_share_stock():
    first, second = InventoryLedger(), InventoryLedger()
    first.reserve("phone", 100)

    assert first.available("phone") == 0
    assert second.available("phone") == DEFAULT_STOCK["phone"]


def test_concurrent_reservations_never_overdraw():
    ledger = InventoryLedger({"laptop": 50})

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda _: ledger.reserve_if_available("laptop", 1), range(200)))

    assert sum(1 for r in results if r is not None) == 50
    assert ledger.available("laptop") == 0
