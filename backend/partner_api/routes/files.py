"""
Partner API - Uploaded File Route
==================================

What:  Serves partner media stored by the upload service.
Who:   Referenced by the logo / cover URLs in partner responses.

Security:
    Only bare filenames are accepted; anything with a path component is
    rejected with 400, so requests cannot leave the upload directory.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from partner_api.config import settings
from partner_api.exceptions import NotFoundError
from partner_api.schemas.common import ErrorResponse
from partner_api.services.upload_service import UploadService, get_upload_service

router = APIRouter(prefix=settings.upload_url_prefix, tags=["Uploads"])


@router.get(
    "/{filename}",
    summary="Serve an uploaded partner file",
    responses={
        200: {"description": "The stored file"},
        400: {"description": "Invalid file name", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
)
async def serve_upload(
    filename: str,
    uploads: UploadService = Depends(get_upload_service),
) -> FileResponse:
    path = uploads.resolve(filename)
    if not path.is_file():
        raise NotFoundError(resource="file", resource_id=filename)

    # Stored names are unique, so the content behind a URL never changes
    return FileResponse(
        path=str(path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
