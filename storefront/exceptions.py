# storefront/exceptions.py
from typing import Any, Dict, List, Optional


class StorefrontError(Exception):
    """Base class for errors raised by the storefront services"""
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StorefrontError):
    """Malformed input: empty product list, non-positive quantity, bad paging"""
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(StorefrontError):
    """Referenced record does not exist (or is soft-deleted)"""
    status_code = 404

    def __init__(self, resource: str, identifier: Optional[Any] = None):
        if identifier is not None:
            message = f"{resource} with ID {identifier} not found"
        else:
            message = f"{resource} not found"
        super().__init__(message)
        self.resource = resource
        self.identifier = identifier


class InsufficientStockError(StorefrontError):
    """Requested quantity exceeds the product's available stock"""
    status_code = 400

    def __init__(self, product_id: int, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for product {product_id}. "
            f"Available: {available}, Requested: {requested}"
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class ConflictError(StorefrontError):
    status_code = 409

    def __init__(self, resource: str, field: str, value: Any):
        super().__init__(f"{resource} with {field} '{value}' already exists")
        self.resource = resource
        self.field = field
        self.value = value


class PersistenceError(StorefrontError):
    """Unexpected database failure; the current request is aborted"""
    status_code = 500
