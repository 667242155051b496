from prometheus_client import Counter, Gauge

# Business Metrics
orders_placed_total = Counter(
    "orders_placed_total",
    "Total order placement attempts",
    ["outcome"] # Labels: 'placed', 'rejected', 'error'
)

order_jobs_total = Counter(
    "order_jobs_total",
    "Background job attempts by outcome",
    ["job", "outcome"] # Labels: outcome='succeeded', 'retried', 'dead_lettered'
)

webhook_calls_total = Counter(
    "webhook_calls_total",
    "Outbound webhook deliveries",
    ["outcome"] # Labels: 'delivered', 'failed'
)

inventory_available_units = Gauge(
    "inventory_available_units",
    "Units currently available per inventory item",
    ["item"]
)
