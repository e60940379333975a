"""Domain errors raised by the services and translated to HTTP codes by the routes."""
from __future__ import annotations


class ShopError(Exception):
    """Base class for all storefront domain errors."""


class NotFound(ShopError):
    def __init__(self, kind: str, key: object):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.key = key


class DuplicateOrderNumber(ShopError):
    def __init__(self, order_number: str):
        super().__init__(f"order number already exists: {order_number}")
        self.order_number = order_number


class DuplicateBrand(ShopError):
    def __init__(self, name: str):
        super().__init__("Brand already exists")
        self.name = name


class InvalidDirection(ShopError, ValueError):
    def __init__(self, direction: str):
        super().__init__('Invalid direction. Use "up" or "down"')
        self.direction = direction


class StoreUnavailable(ShopError):
    """The database could not be reached."""
