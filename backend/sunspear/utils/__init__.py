"""
Utilities Module

Common utilities, exceptions, and response models.
"""

from .exceptions import (
    BusinessException,
    PersistenceError,
    EngineError,
    ValidationException,
    NotFoundError,
    ConflictError,
    register_exception_handlers,
)
from .model import (
    ResponseCode,
    BaseResponse,
    ListResponse,
)

__all__ = [
    # Exceptions
    "BusinessException",
    "PersistenceError",
    "EngineError",
    "ValidationException",
    "NotFoundError",
    "ConflictError",
    "register_exception_handlers",
    # Response models
    "ResponseCode",
    "BaseResponse",
    "ListResponse",
]
