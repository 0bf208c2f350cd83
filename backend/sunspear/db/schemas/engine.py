"""
Engine Schemas

Request bodies for the image, network and volume routes
"""

from pydantic import BaseModel, Field


class PullImageRequest(BaseModel):
    """Schema for pulling an image"""
    image: str = Field(..., min_length=1, description="Image reference, tag defaults to latest")
