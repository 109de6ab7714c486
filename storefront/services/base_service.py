# storefront/services/base_service.py
import functools
import logging
from typing import Any, Dict, Optional, Tuple, Type, TypeVar
import asyncpg
import pydantic
from ..config import Config
from ..exceptions import PersistenceError, ValidationError
from ..models.base import MAX_INT

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

SORT_ORDERS = ("ASC", "DESC")

def handles_db_errors(action: str):
    """Re-raise unexpected asyncpg failures as PersistenceError.

    Unique violations never get here: repositories turn them into
    ConflictError on the spot.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except (asyncpg.PostgresError, asyncpg.InterfaceError) as e:
                self.logger.error(f"Database error while {action}: {e}", exc_info=True)
                raise PersistenceError(f"Database error while {action}") from e
        return wrapper
    return decorator

class BaseService:
    """Base class for services"""

    def __init__(self, db):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__module__)

    @staticmethod
    def parse(model: Type[ModelT], data: Any) -> ModelT:
        """Validate input data against a request model"""
        if isinstance(data, model):
            return data
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            errors = [
                {
                    "property": ".".join(str(part) for part in err["loc"]),
                    "message": err["msg"]
                }
                for err in e.errors()
            ]
            raise ValidationError(f"Invalid {model.__name__} data", errors=errors) from e

    @staticmethod
    def check_id(value: int, label: str):
        if value is None or not 0 < value <= MAX_INT:
            raise ValidationError(f"Invalid {label} ID")

    @staticmethod
    def paginate(page: int, limit: Optional[int], clamp: bool = False) -> Tuple[int, int, int]:
        """Validate paging arguments; returns (page, limit, offset)"""
        limit = Config.DEFAULT_PAGE_SIZE if limit is None else limit

        if page < 1:
            raise ValidationError("Page must be greater than 0")
        if limit < 1:
            raise ValidationError("Limit must be greater than 0")
        if limit > Config.MAX_PAGE_SIZE:
            if not clamp:
                raise ValidationError(f"Limit must be between 1 and {Config.MAX_PAGE_SIZE}")
            limit = Config.MAX_PAGE_SIZE

        return page, limit, (page - 1) * limit

    @staticmethod
    def sorting(sort_by: str, sort_order: str, columns: Dict[str, str]) -> Tuple[str, str]:
        """Map a public sort field to its column and check the direction"""
        if sort_by not in columns:
            raise ValidationError(
                f"Sort field must be one of: {', '.join(columns)}"
            )
        sort_order = sort_order.upper()
        if sort_order not in SORT_ORDERS:
            raise ValidationError("Sort order must be ASC or DESC")
        return columns[sort_by], sort_order
