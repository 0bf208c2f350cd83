"""
Image API Router

Engine image routes
"""

from fastapi import APIRouter, Path, Query, status
from sunspear.db.schemas import PullImageRequest
from sunspear.service.resource_service import ResourceService

image_router = APIRouter(prefix="/images", tags=["images"])

image_service = ResourceService()


@image_router.get(
    "",
    summary="List images",
    operation_id="list_images"
)
async def list_images():
    return await image_service.list_images()


@image_router.post(
    "",
    summary="Pull image",
    operation_id="pull_image",
    status_code=status.HTTP_201_CREATED,
)
async def pull_image(data: PullImageRequest):
    """Answers once the pull has finished"""
    return await image_service.pull_image(data.image)


@image_router.delete(
    "/{image_id:path}",
    summary="Remove image",
    operation_id="remove_image"
)
async def remove_image(
    image_id: str = Path(..., description="Image ID or reference"),
    force: bool = Query(False, description="Remove even when tagged more than once or in use by a stopped container"),
):
    return await image_service.remove_image(image_id, force=force)
