"""Pydantic schemas for file endpoints."""

from typing import List

from pydantic import BaseModel


class UploadedFile(BaseModel):
    """Metadata of a stored upload."""
    url: str
    filename: str
    folder: str
    size: int
    mimetype: str


class UploadFileResponse(BaseModel):
    """Response model for file upload."""
    success: bool = True
    data: UploadedFile


class FileEntryResponse(BaseModel):
    """Response model for one file in a folder listing."""
    filename: str
    url: str
    size: int


class ListFilesResponse(BaseModel):
    """Response model for folder listing."""
    success: bool = True
    count: int
    data: List[FileEntryResponse]
