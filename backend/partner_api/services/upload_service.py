"""
Partner API - Upload Storage Service
=====================================

What:  Writes uploaded partner media to the local upload directory.
How:   Each file gets a generated name, is size-checked, and is written with
       async file I/O in exclusive-create mode.
Who:   Called by the multipart ingestion dependency for every accepted file;
       the files route uses resolve() to serve them back.
When:  Directory creation at startup (lifespan); writes during PATCH
       /partners/{id}, before the partner handler runs.

Filename Format:
    {field_name}-{timestamp_millis}-{random_int}-{original_filename}
    e.g. logo-1718000000000-482913775-test.png

    The timestamp and random part make collisions unlikely; exclusive-create
    makes them harmless. If a generated name already exists, a fresh one is
    drawn (up to MAX_NAME_ATTEMPTS times) instead of overwriting the file.

Lifecycle:
    Files are never deleted here. Rows point at them by filename.
"""

import logging
import random
import time
from pathlib import Path
from typing import Optional, Union

import aiofiles

from partner_api.config import settings
from partner_api.exceptions import FileStorageError, ValidationError
from partner_api.schemas.upload import StoredUpload

logger = logging.getLogger(__name__)

# Upper bound of the random component, inclusive
RANDOM_SUFFIX_MAX = 1_000_000_000

# Fresh names drawn before giving up on a colliding upload
MAX_NAME_ATTEMPTS = 5

# Substitute for client filenames that reduce to nothing
DEFAULT_UPLOAD_NAME = "upload"


def upload_url(filename: str) -> str:
    """URL path a stored file is served from (see routes/files.py)."""
    return f"{settings.upload_url_prefix}/{filename}"


class UploadService:
    """
    Stores uploaded files under a single flat directory.

    Construction has no side effects; call ensure_upload_directory() once
    during application startup before the first write.
    """

    def __init__(
        self,
        upload_dir: Optional[Union[str, Path]] = None,
        max_upload_size: Optional[int] = None,
    ):
        """
        Args:
            upload_dir: Override settings.upload_dir (used in tests).
            max_upload_size: Override settings.max_upload_size.
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()
        self.max_upload_size = max_upload_size or settings.max_upload_size

    def ensure_upload_directory(self) -> Path:
        """
        Create the upload directory (and parents) if it does not exist.

        Idempotent: safe to call any number of times.

        Raises:
            FileStorageError if the directory cannot be created.
        """
        if self.upload_dir.is_dir():
            return self.upload_dir
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Could not create upload directory %s: %s", self.upload_dir, str(e))
            raise FileStorageError(
                message="Upload storage is not available.",
                context={"path": str(self.upload_dir), "os_error": str(e)},
            )
        logger.info("Upload directory created: %s", self.upload_dir)
        return self.upload_dir

    @staticmethod
    def clean_original_filename(original_filename: Optional[str]) -> str:
        """
        Reduce a client-supplied filename to its final path component.

        Browsers send bare names, but nothing stops a client from sending
        "../../etc/passwd"; only "passwd" survives here. Backslashes are treated
        as separators too.
        """
        name = (original_filename or "").replace("\\", "/")
        name = Path(name).name.strip()
        if name in ("", ".", ".."):
            return DEFAULT_UPLOAD_NAME
        return name

    def generate_filename(self, field_name: str, original_filename: Optional[str]) -> str:
        """Build `{field}-{millis}-{random}-{original}` for a new upload."""
        timestamp_ms = int(time.time() * 1000)
        suffix = random.randint(0, RANDOM_SUFFIX_MAX)
        original = self.clean_original_filename(original_filename)
        return f"{field_name}-{timestamp_ms}-{suffix}-{original}"

    def validate_size(self, field_name: str, size: int) -> None:
        """
        Raises:
            ValidationError when the file is larger than max_upload_size.
        """
        if size > self.max_upload_size:
            max_mb = self.max_upload_size / (1024 * 1024)
            raise ValidationError(
                message=(
                    f"File for '{field_name}' ({size / (1024 * 1024):.1f}MB) "
                    f"exceeds maximum of {max_mb:.0f}MB."
                ),
                field=field_name,
                context={"max_size_bytes": self.max_upload_size, "actual_size": size},
            )

    def url_for(self, filename: str) -> str:
        return upload_url(filename)

    async def store_upload(
        self,
        field_name: str,
        original_filename: Optional[str],
        content: bytes,
    ) -> StoredUpload:
        """
        Validate and write one uploaded file.

        Args:
            field_name: Form field the file arrived under (becomes the name prefix)
            original_filename: Client-supplied filename
            content: File bytes

        Returns:
            StoredUpload describing the written file.

        Raises:
            ValidationError: file too large
            FileStorageError: OS error, or no free name after MAX_NAME_ATTEMPTS
        """
        self.validate_size(field_name, len(content))

        for attempt in range(1, MAX_NAME_ATTEMPTS + 1):
            filename = self.generate_filename(field_name, original_filename)
            path = self.upload_dir / filename
            try:
                # "xb": fail instead of overwriting an existing file
                async with aiofiles.open(path, "xb") as f:
                    await f.write(content)
            except FileExistsError:
                logger.warning(
                    "Upload name collision on %s (attempt %d/%d)",
                    filename,
                    attempt,
                    MAX_NAME_ATTEMPTS,
                )
                continue
            except OSError as e:
                logger.error("Failed to store upload at %s: %s", path, str(e))
                raise FileStorageError(
                    message="Failed to save uploaded file. Please try again.",
                    context={"path": str(path), "os_error": str(e)},
                )

            logger.info("Upload stored: %s (%d bytes)", filename, len(content))
            return StoredUpload(
                field_name=field_name,
                original_filename=original_filename or "",
                filename=filename,
                path=str(path),
                size=len(content),
                url=self.url_for(filename),
            )

        raise FileStorageError(
            message="Failed to save uploaded file. Please try again.",
            context={"field": field_name, "reason": "filename collisions"},
        )

    def resolve(self, filename: str) -> Path:
        """
        Absolute path of a stored file.

        Raises:
            ValidationError if `filename` is not a bare name inside the
            upload directory.
        """
        if not filename or Path(filename).name != filename or filename in (".", ".."):
            raise ValidationError(message="Invalid file path", field="filename")
        return self.upload_dir / filename


# Process-wide instance; configuration comes from settings
upload_service = UploadService()


def get_upload_service() -> UploadService:
    """FastAPI dependency returning the process-wide UploadService."""
    return upload_service
