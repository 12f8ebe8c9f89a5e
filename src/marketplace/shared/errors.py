"""Error taxonomy for the marketplace.

Validation and not-found errors extend Protean's own exceptions so that
anything Protean raises (field validation, missing aggregates) lands in the
same buckets as ours.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class EmptyCart(ValidationError):
    def __init__(self, message="No order items provided"):
        super().__init__({"items": [message]})


class ConflictError(ValidationError):
    """The request is well-formed but clashes with current state."""


class OutOfStock(ConflictError):
    def __init__(self, product_name):
        super().__init__({"items": [f"Insufficient stock for product: {product_name}"]})
        self.product_name = product_name


class InvalidTransition(ConflictError):
    def __init__(self, current, target, reason=None):
        message = reason or f"Cannot transition order from {current} to {target}"
        super().__init__({"status": [message]})
        self.current = current
        self.target = target


class ProductNotFound(ObjectNotFoundError):
    def __init__(self, product_id):
        self.messages = {"product": [f"Product with id {product_id} not found"]}
        super().__init__(self.messages)
        self.product_id = product_id


class OrderNotFound(ObjectNotFoundError):
    def __init__(self, order_id):
        self.messages = {"order": ["Order not found"]}
        super().__init__(self.messages)
        self.order_id = order_id


class AuthorizationError(Exception):
    """The caller lacks the role or ownership required for the operation."""

    def __init__(self, message="Not authorized to perform this action"):
        super().__init__(message)
        self.message = message
