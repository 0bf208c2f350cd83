"""
Unified Response Model

Every route, and every error handler, answers with the same envelope:
``{"code": <status>, "message": <text>, "data": <payload>}``.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field
from .response_code import ResponseCode


class BaseResponse(BaseModel):
    """Response envelope"""

    code: int = Field(ResponseCode.SUCCESS, description="Mirrors the HTTP status")
    message: str = Field("Success", description="Human readable outcome")
    data: Optional[Any] = Field("", description="Payload, empty string when there is none")

    model_config = {
        "arbitrary_types_allowed": True,
        "json_schema_extra": {
            "example": {
                "code": 200,
                "message": "Success",
                "data": {"id": 1, "name": "shop", "status": "running"}
            }
        }
    }

    @classmethod
    def of(cls, code: int, data: Optional[Any] = "", message: str = None):
        """
        Build an envelope for an arbitrary status code

        Args:
            code: Status code, also used as HTTP status by the handlers
            data: Payload
            message: Overrides the default text for ``code``
        """
        return cls(code=code, message=message or ResponseCode.get_message(code), data=data)

    @classmethod
    def success(cls, data: Optional[Any] = "", message: str = None):
        return cls.of(ResponseCode.SUCCESS, data=data, message=message)

    @classmethod
    def created(cls, data: Optional[Any] = "", message: str = None):
        """Envelope for a newly deployed project or installed app"""
        return cls.of(ResponseCode.CREATED, data=data, message=message)

    @classmethod
    def error(cls, data: Optional[Any] = "", message: str = None, code: int = None):
        """Envelope for a failure, 500 unless told otherwise"""
        return cls.of(code or ResponseCode.INTERNAL_SERVER_ERROR, data=data, message=message)

    @classmethod
    def validation_error(cls, data: Optional[Any] = "", message: str = None):
        return cls.of(ResponseCode.UNPROCESSABLE_ENTITY, data=data, message=message)


class ListResponse(BaseResponse):
    """Envelope for collections: ``data`` is ``{"items": [...], "total": n}``"""

    @classmethod
    def success(cls, items: List[Any], total: int = None, message: str = None):
        data = {
            "items": items,
            "total": len(items) if total is None else total,
        }
        return cls.of(ResponseCode.SUCCESS, data=data, message=message)
