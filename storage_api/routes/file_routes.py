"""File upload API routes (profile images, resumes)."""

import mimetypes
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import FileResponse

from storage_api import config
from storage_api.auth import require_api_key
from storage_api.exceptions import BadRequestError
from storage_api.schemas.common import MessageResponse
from storage_api.schemas.files import (
    FileEntryResponse,
    ListFilesResponse,
    UploadedFile,
    UploadFileResponse,
)
from storage_api.service_locator import get_file_service
from storage_api.services.file_service import FileService
from storage_api.utils import get_base_url

router = APIRouter(prefix="/files", tags=["Files"], dependencies=[Depends(require_api_key)])


@router.post("/{folder}", response_model=UploadFileResponse, status_code=status.HTTP_201_CREATED)
def upload_file(
    folder: str,
    request: Request,
    file: Optional[UploadFile] = File(default=None),
    service: FileService = Depends(get_file_service),
):
    """
    Upload a file to a folder.

    Parameters:
        - folder: 'profileimages' (images) or 'resumes' (images and PDFs)
        - file: File to upload (multipart/form-data, field "file")
        - X-API-Key header or apiKey query parameter (required)

    Returns:
        - url: Download URL (carries the API key)
        - filename: Generated stored name
        - folder, size, mimetype

    Raises:
        - 400: Missing file, unknown folder, rejected type or file too large
        - 401: Invalid or missing API key
    """
    if file is None:
        raise BadRequestError("No file uploaded")

    try:
        content = file.file.read(service.max_size + 1)
    finally:
        file.file.close()

    stored = service.put(folder, file.content_type, content, file.filename)

    base_url = get_base_url(request, config.PUBLIC_BASE_URL)
    url = f"{base_url}/files/{folder}/{stored.filename}?apiKey={quote(config.API_KEY or '', safe='')}"

    return UploadFileResponse(
        data=UploadedFile(
            url=url,
            filename=stored.filename,
            folder=stored.folder,
            size=stored.size,
            mimetype=stored.mimetype,
        )
    )


@router.get("/{folder}/{filename}")
def serve_file(folder: str, filename: str, service: FileService = Depends(get_file_service)):
    """
    Serve a stored file.

    Raises:
        - 400: Unknown folder
        - 401: Invalid or missing API key
        - 404: File not found
    """
    path = service.get(folder, filename)
    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return FileResponse(path, media_type=media_type)


@router.delete("/{folder}/{filename}", response_model=MessageResponse)
def delete_file(folder: str, filename: str, service: FileService = Depends(get_file_service)):
    """
    Delete a stored file.

    Raises:
        - 400: Unknown folder
        - 401: Invalid or missing API key
        - 404: File not found
    """
    service.delete(folder, filename)
    return MessageResponse(message="File deleted")


@router.get("/{folder}", response_model=ListFilesResponse)
def list_files(folder: str, request: Request, service: FileService = Depends(get_file_service)):
    """
    List the files stored in a folder.

    Raises:
        - 400: Unknown folder
        - 401: Invalid or missing API key
    """
    base_url = get_base_url(request, config.PUBLIC_BASE_URL)
    entries = [
        FileEntryResponse(
            filename=entry.filename,
            url=f"{base_url}/files/{folder}/{entry.filename}",
            size=entry.size,
        )
        for entry in service.list(folder)
    ]
    return ListFilesResponse(count=len(entries), data=entries)
