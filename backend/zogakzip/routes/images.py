"""
Zogakzip Backend — Image Upload Route Handlers
================================================

What:  POST /api/image stores one uploaded image; GET /uploads/{path}
       serves stored images back.
How:   Receives multipart upload, delegates to FileService, returns the URL.

Request Flow:
    1. Client sends multipart/form-data with an 'image' field
    2. Missing field → 400
    3. Bytes are stored under a timestamp name
    4. 200 with {"imageUrl": "/uploads/<name>"}
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import FileResponse

from zogakzip.config import settings
from zogakzip.exceptions import ValidationError
from zogakzip.schemas.common import ErrorResponse, ImageUploadResponse
from zogakzip.services.file_service import file_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Images"])


@router.post(
    "/api/image",
    response_model=ImageUploadResponse,
    responses={400: {"description": "No image field in the upload", "model": ErrorResponse}},
    summary="Upload an image",
    description="Stores the file as-is and returns a relative URL for use as imageUrl.",
)
async def upload_image(
    image: Optional[UploadFile] = File(default=None, description="Image file"),
) -> ImageUploadResponse:
    if image is None:
        raise ValidationError(message="An image file is required", field="image")

    try:
        content = await image.read()
        logger.info(
            "Received image upload: filename=%s, size=%d bytes",
            image.filename or "unknown",
            len(content),
        )
        image_url = await file_service.store_image(image.filename, content)
    finally:
        await image.close()

    return ImageUploadResponse(image_url=image_url)


@router.get(
    settings.upload_url_prefix + "/{file_path:path}",
    summary="Serve uploaded image files",
    responses={
        200: {"description": "Image file"},
        404: {"description": "File not found", "model": ErrorResponse},
    },
)
async def serve_upload(file_path: str) -> FileResponse:
    """
    Serve a stored upload.

    Paths that resolve outside the upload directory (../) are rejected
    with 400; the media type is guessed from the file name.
    """
    full_path = file_service.resolve(file_path)
    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
