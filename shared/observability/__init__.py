from .setup import setup_observability
from .metrics import (
    orders_placed_total,
    order_jobs_total,
    webhook_calls_total,
    inventory_available_units
)
