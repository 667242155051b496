"""
In-memory stock ledger.

Stock lives on the ledger instance, not at module level, so every app (and
every test) owns an independent copy. All reads and writes go through one lock;
`reserve_if_available` performs the check and the deduction inside the same
critical section, which is what the order workflow relies on.
"""
import threading
from dataclasses import dataclass

import structlog

from shared.observability import inventory_available_units

logger = structlog.get_logger(__name__)

# Resets on every process start; there is no backing table.
DEFAULT_STOCK = {
    "laptop": 50,
    "phone": 100,
    "tablet": 30,
    "monitor": 25,
    "keyboard": 200,
    "mouse": 200,
    "headset": 75,
}


@dataclass(frozen=True)
class Reservation:
    item: str
    quantity_deducted: int
    remaining: int


class InventoryLedger:
    def __init__(self, stock: dict[str, int] | None = None):
        initial = DEFAULT_STOCK if stock is None else stock
        self._stock = {name.lower(): max(0, int(qty)) for name, qty in initial.items()}
        self._lock = threading.Lock()
        for name, qty in self._stock.items():
            inventory_available_units.labels(item=name).set(qty)

    def available(self, item: str) -> int:
        with self._lock:
            return self._stock.get(item.lower(), 0)

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._stock)

    def check_availability(self, item: str, quantity: int) -> bool:
        """True iff the item is known and has at least `quantity` units left."""
        available = self.available(item)
        logger.info("inventory_check", item=item, requested=quantity, available=available)
        return available >= quantity

    def reserve(self, item: str, quantity: int) -> Reservation:
        """
        Deducts `quantity` without re-checking availability, flooring at zero.
        Callers that need a guarantee must use `reserve_if_available`.
        """
        with self._lock:
            return self._deduct(item, quantity)

    def reserve_if_available(self, item: str, quantity: int) -> Reservation | None:
        """Atomic check-and-reserve. Returns None (and changes nothing) when short."""
        with self._lock:
            available = self._stock.get(item.lower(), 0)
            if available < quantity:
                logger.warning("inventory_insufficient", item=item, requested=quantity, available=available)
                return None
            return self._deduct(item, quantity)

    def release(self, item: str, quantity: int) -> None:
        """Puts reserved units back. Unknown items are ignored."""
        key = item.lower()
        with self._lock:
            if key not in self._stock:
                return
            self._stock[key] += quantity
            inventory_available_units.labels(item=key).set(self._stock[key])
            logger.info("inventory_released", item=item, quantity=quantity, remaining=self._stock[key])

    def _deduct(self, item: str, quantity: int) -> Reservation:
        # Caller holds the lock
        key = item.lower()
        before = self._stock.get(key, 0)
        after = max(0, before - quantity)
        if key in self._stock:
            self._stock[key] = after
            inventory_available_units.labels(item=key).set(after)

        logger.info("inventory_reserved", item=item, requested=quantity, before=before, after=after)
        return Reservation(item=item, quantity_deducted=before - after, remaining=after)
