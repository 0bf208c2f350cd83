"""
Marketplace Schemas

Pydantic models for catalog apps, install requests and installed apps
"""

import json
from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class EnvVarSpec(BaseModel):
    name: str
    description: str = ""


class AppEnvVars(BaseModel):
    required: List[EnvVarSpec] = []
    optional: List[EnvVarSpec] = []


class CatalogApp(BaseModel):
    """One entry of the static app catalog"""
    id: str
    name: str
    description: str = ""
    icon: str = ""
    category: str = ""
    version: str = "latest"
    image: str
    ports: Dict[str, int] = Field(default_factory=dict, description="Port label -> container port")
    volumes: List[str] = Field(default_factory=list, description="Container paths used by the app")
    env_vars: AppEnvVars = Field(default_factory=AppEnvVars, alias="envVars")

    model_config = {"populate_by_name": True}


class EnvEntry(BaseModel):
    name: str
    value: str = ""


class InstallRequest(BaseModel):
    """Schema for installing a catalog app"""
    name: Optional[str] = Field(None, pattern=r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$", description="Container name, defaults to '<app id>-app'")
    env: List[EnvEntry] = Field(default_factory=list, description="Environment variables")
    ports: Dict[str, str] = Field(default_factory=dict, description="Port label -> host port")
    volumes: Dict[str, str] = Field(default_factory=dict, description="Container path -> host path")


class InstalledAppResponse(BaseModel):
    """Schema for installed app response"""
    id: int
    app_id: str
    app_name: str
    container_ids: List[str] = []
    config: Dict[str, str] = {}
    status: str
    create_time: Optional[datetime] = None

    @field_validator("container_ids", mode="before")
    @classmethod
    def decode_container_ids(cls, v):
        if isinstance(v, str):
            return json.loads(v or "[]")
        return v

    @field_validator("config", mode="before")
    @classmethod
    def decode_config(cls, v):
        if isinstance(v, str):
            return json.loads(v or "{}")
        return v

    class Config:
        from_attributes = True
