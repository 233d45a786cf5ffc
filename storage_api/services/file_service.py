"""File service: upload policy for the fixed set of folders."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from common.constants import MAX_UPLOAD_SIZE_BYTES, PROFILE_IMAGES_BUCKET, RESUMES_BUCKET
from common.logging_config import get_logger
from storage_api.exceptions import (
    BadRequestError,
    FileTooLargeError,
    InvalidBucketError,
    UnsupportedContentTypeError,
)
from storage_api.paths import generate_blob_name
from storage_api.repositories.blob_repository import BlobRepository
from storage_api.types import BlobEntry, StoredFile

logger = get_logger(__name__)


@dataclass(frozen=True)
class BucketPolicy:
    """
    Content types accepted by a folder.

    Attributes:
        prefixes: Accepted mimetype prefixes (e.g. "image/")
        exact: Accepted exact mimetypes (e.g. "application/pdf")
        rejection_message: Error message for anything else
    """
    prefixes: Tuple[str, ...] = ()
    exact: Tuple[str, ...] = ()
    rejection_message: str = "File type not allowed"

    def accepts(self, content_type: Optional[str]) -> bool:
        if not content_type:
            return False
        content_type = content_type.split(";")[0].strip().lower()
        return content_type in self.exact or any(content_type.startswith(p) for p in self.prefixes)


DEFAULT_POLICIES: Dict[str, BucketPolicy] = {
    PROFILE_IMAGES_BUCKET: BucketPolicy(
        prefixes=("image/",),
        rejection_message="Only image files are allowed for profile images",
    ),
    RESUMES_BUCKET: BucketPolicy(
        prefixes=("image/",),
        exact=("application/pdf",),
        rejection_message="Only images and PDFs are allowed for resumes",
    ),
}


class FileService:
    def __init__(
        self,
        blob_repo: BlobRepository,
        policies: Optional[Dict[str, BucketPolicy]] = None,
        max_size: int = MAX_UPLOAD_SIZE_BYTES,
    ):
        self.blob_repo = blob_repo
        self.policies = policies if policies is not None else DEFAULT_POLICIES
        self.max_size = max_size

    def _policy(self, folder: str) -> BucketPolicy:
        policy = self.policies.get(folder)
        if policy is None:
            raise InvalidBucketError(f"Folder '{folder}' is not allowed")
        return policy

    def put(
        self,
        folder: str,
        content_type: Optional[str],
        content: bytes,
        original_filename: Optional[str],
    ) -> StoredFile:
        """
        Store an uploaded file under a freshly generated name.

        Args:
            folder: Target folder (must be one of the configured folders)
            content_type: Mimetype declared by the client
            content: Raw file bytes
            original_filename: Client filename; only its extension is kept

        Returns:
            StoredFile with the generated filename, size and mimetype

        Raises:
            InvalidBucketError: If the folder is not allowed
            UnsupportedContentTypeError: If the folder rejects the mimetype
            FileTooLargeError: If content exceeds the size ceiling
            BadRequestError: If content is empty
        """
        policy = self._policy(folder)
        if not policy.accepts(content_type):
            raise UnsupportedContentTypeError(policy.rejection_message)
        if len(content) > self.max_size:
            raise FileTooLargeError(
                f"File too large: {len(content)} bytes exceeds limit of {self.max_size} bytes"
            )
        if not content:
            raise BadRequestError("Uploaded file is empty")

        filename = generate_blob_name(original_filename)
        size = self.blob_repo.write(folder, filename, content)

        logger.info(f"[UPLOAD] {folder}/{filename} ({size / 1024:.1f}KB)")
        return StoredFile(filename=filename, folder=folder, size=size, mimetype=content_type)

    def get(self, folder: str, filename: str) -> Path:
        """
        Resolve a stored file for serving.

        Raises:
            InvalidBucketError: If the folder is not allowed
            BlobNotFoundError: If the file does not exist
        """
        self._policy(folder)
        return self.blob_repo.open_path(folder, filename)

    def delete(self, folder: str, filename: str) -> str:
        self._policy(folder)
        removed = self.blob_repo.delete(folder, filename)
        logger.info(f"[DELETE] {folder}/{removed}")
        return removed

    def list(self, folder: str) -> List[BlobEntry]:
        self._policy(folder)
        return self.blob_repo.list_entries(folder)
