"""
Business Exception Classes - Base Exception Definitions

Contains all business logic related exception types.
"""

from typing import Optional, Any, List


class BusinessException(Exception):
    """
    Business Logic Exception

    Client-side faults. ``code`` is the HTTP status the API answers with.
    """

    def __init__(self, message: str, code: int = 400, data: Any = None):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class PersistenceError(Exception):
    """
    Persistence Exception

    Raised when a read or write against the embedded store fails.
    """

    def __init__(self, message: str, code: int = 500, operation: Optional[str] = None):
        self.message = message
        self.code = code
        self.operation = operation
        super().__init__(self.message)


class EngineError(Exception):
    """
    Container Engine Exception

    Any failure reported by the container engine (pull, create, start, network operations).
    """

    def __init__(self, message: str, operation: str, details: Optional[dict] = None, code: int = 502):
        self.message = message
        self.operation = operation
        self.details = details or {}
        self.code = code
        super().__init__(self.message)


class EngineNotFoundError(EngineError):
    """The engine does not know the referenced container, network or image."""
    pass


class ValidationException(Exception):
    """
    Data Validation Exception

    Used to handle data validation related exceptions.
    """

    def __init__(self, errors: Any, code: int = 422, message: str = "Validation failed"):
        self.errors = errors
        self.code = code
        self.message = message
        super().__init__(self.message)


class NotFoundError(BusinessException):
    """
    Resource Not Found Exception

    Used when a requested resource is not found.
    """

    def __init__(self, message: str = "Resource not found", resource_type: Optional[str] = None, resource_id: Optional[str] = None):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message=message, code=404)


class ConflictError(BusinessException):
    """Raised when a resource with the same unique key already exists."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message=message, code=409)


class ManifestParseError(BusinessException):
    """
    Manifest Parse Exception

    The compose manifest is not valid YAML, has the wrong shape, or declares no services.
    """

    def __init__(self, message: str):
        super().__init__(message=message, code=400)


class UnknownDependencyError(BusinessException):
    """A service depends on a service the manifest does not define."""

    def __init__(self, service: str, dependency: str):
        self.service = service
        self.dependency = dependency
        super().__init__(
            message=f"service {service} depends on undefined service {dependency}",
            code=400,
            data={"service": service, "dependency": dependency},
        )


class DependencyCycleError(BusinessException):
    """The depends_on graph contains a cycle."""

    def __init__(self, services: List[str]):
        self.services = services
        super().__init__(
            message=f"circular dependency detected between services: {', '.join(services)}",
            code=400,
            data={"services": services},
        )
