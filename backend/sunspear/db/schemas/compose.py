"""
Compose Schemas

Pydantic models for compose project validation and serialization
"""

import json
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class DeployRequest(BaseModel):
    """Schema for deploying a compose project"""
    name: str = Field(..., min_length=1, max_length=128, pattern=r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$", description="Project name")
    description: str = Field("", description="Free-text description")
    yaml: str = Field(..., min_length=1, description="Compose manifest")


class ValidateRequest(BaseModel):
    """Schema for validating a compose manifest"""
    yaml: str = Field(..., min_length=1, description="Compose manifest")


class ValidateResponse(BaseModel):
    valid: bool
    services: List[str]
    version: str


class ComposeProjectResponse(BaseModel):
    """Schema for compose project response"""
    id: int
    name: str
    description: str = ""
    yaml_content: str
    status: str
    container_ids: List[str] = []
    network_ids: List[str] = []
    volume_names: List[str] = []
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None

    @field_validator("container_ids", "network_ids", "volume_names", mode="before")
    @classmethod
    def decode_json_list(cls, v):
        """Id lists are persisted as JSON array strings"""
        if isinstance(v, str):
            return json.loads(v or "[]")
        return v

    class Config:
        from_attributes = True


class TemplateResponse(BaseModel):
    name: str
    description: str
    yaml: str
