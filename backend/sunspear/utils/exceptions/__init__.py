"""
Exception Classes

Contains all custom exception types for the application.
"""

from .base_exceptions import (
    BusinessException,
    PersistenceError,
    EngineError,
    EngineNotFoundError,
    ValidationException,
    NotFoundError,
    ConflictError,
    ManifestParseError,
    UnknownDependencyError,
    DependencyCycleError,
)

from .exception_handlers import (
    register_exception_handlers,
    validation_exception_handler,
    http_exception_handler,
    business_exception_handler,
    engine_exception_handler,
    persistence_exception_handler,
    general_exception_handler,
)

__all__ = [
    "BusinessException",
    "PersistenceError",
    "EngineError",
    "EngineNotFoundError",
    "ValidationException",
    "NotFoundError",
    "ConflictError",
    "ManifestParseError",
    "UnknownDependencyError",
    "DependencyCycleError",
    "register_exception_handlers",
    "validation_exception_handler",
    "http_exception_handler",
    "business_exception_handler",
    "engine_exception_handler",
    "persistence_exception_handler",
    "general_exception_handler",
]
