"""
Response Status Codes

The envelope ``code`` always equals the HTTP status of the response.
"""


class ResponseCode:
    """Status codes used by the API"""

    SUCCESS = 200
    CREATED = 201

    # Manifest, dependency or template-name errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    # Duplicate project name
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422

    # Store failures and unexpected errors
    INTERNAL_SERVER_ERROR = 500
    # Container engine failures
    BAD_GATEWAY = 502
    # Engine unreachable (health check only)
    SERVICE_UNAVAILABLE = 503

    _MESSAGES = {
        SUCCESS: "Success",
        CREATED: "Created successfully",
        BAD_REQUEST: "Bad request",
        NOT_FOUND: "Resource not found",
        CONFLICT: "Resource already exists",
        UNPROCESSABLE_ENTITY: "Validation failed",
        INTERNAL_SERVER_ERROR: "Internal server error",
        BAD_GATEWAY: "Container engine error",
        SERVICE_UNAVAILABLE: "Container engine unavailable",
    }

    @classmethod
    def get_message(cls, code: int) -> str:
        return cls._MESSAGES.get(code, "Unknown error")
