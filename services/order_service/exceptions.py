class OrderError(Exception):
    """Base class for failures the order workflow reports to its caller."""


class OutOfStockError(OrderError):
    def __init__(self, item: str, quantity: int):
        self.item = item
        self.quantity = quantity
        super().__init__(f"Item '{item}' is out of stock or insufficient quantity.")


class OrderNotFoundError(OrderError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class OrderPersistenceError(OrderError):
    def __init__(self):
        super().__init__("The order could not be saved. Please try again.")
