"""
Partner API - Multipart Ingestion
==================================

What:  A configurable FastAPI dependency that parses a multipart body, enforces
       which file fields are accepted and how many files each may carry, stores
       the accepted files, and hands the route the text fields plus references
       to the stored files.
How:   Starlette's form parser (python-multipart) spools the body; every file
       part is checked against the declared UploadFields and the size limit
       (declared size before reading, actual size after) before anything is
       written; accepted files go through UploadService.store_upload().
Who:   Declared per route, e.g. the partner media upload in routes/partners.py.

Acceptance Rules:
    - A file part under an undeclared field name   → MalformedUploadError (400)
    - More file parts under a field than max_count → MalformedUploadError (400)
    - Any file part over max_upload_size             → ValidationError (400),
      with nothing written for the other parts either
    - File parts with an empty filename (an empty <input type="file">) are skipped
    - Declared text fields are passed through unmodified; other text fields
      are dropped

Example:
    media_upload = MultipartIngestion(
        files=[UploadField("logo", max_count=1)],
        text_fields=["about"],
    )

    @router.patch("/{partner_id}")
    async def update(form: IngestedForm = Depends(media_upload)): ...
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from fastapi import Depends, Request
from starlette.datastructures import UploadFile

from partner_api.exceptions import MalformedUploadError
from partner_api.schemas.upload import StoredUpload
from partner_api.services.upload_service import UploadService, get_upload_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadField:
    """A file field accepted by an ingestion, with its per-request file limit."""
    name: str
    max_count: int = 1


@dataclass
class IngestedForm:
    """Result of ingesting one request body."""
    fields: Dict[str, str] = field(default_factory=dict)
    files: Dict[str, List[StoredUpload]] = field(default_factory=dict)

    def single_files(self) -> Dict[str, StoredUpload]:
        """First stored file per field (for fields declared with max_count=1)."""
        return {name: stored[0] for name, stored in self.files.items() if stored}


class MultipartIngestion:
    """
    Multipart body ingestion with declared fields and per-field max counts.

    Instances are callables usable directly in Depends().
    """

    def __init__(self, files: Iterable[UploadField], text_fields: Iterable[str] = ()):
        self.file_fields: Dict[str, UploadField] = {f.name: f for f in files}
        self.text_fields = tuple(text_fields)

    def check_file_parts(self, parts: List[Tuple[str, UploadFile]]) -> None:
        """
        Enforce the acceptance rules on all file parts of a request.

        Raises:
            MalformedUploadError on the first violation found.
        """
        counts = Counter(name for name, _ in parts)
        for name, received in counts.items():
            declared = self.file_fields.get(name)
            if declared is None:
                raise MalformedUploadError(
                    message=f"Unexpected file field '{name}'",
                    field=name,
                    context={"accepted": sorted(self.file_fields)},
                )
            if received > declared.max_count:
                raise MalformedUploadError(
                    message=f"Field '{name}' accepts at most {declared.max_count} file(s)",
                    field=name,
                    context={"max_count": declared.max_count, "received": received},
                )

    async def __call__(
        self,
        request: Request,
        uploads: UploadService = Depends(get_upload_service),
    ) -> IngestedForm:
        ingested = IngestedForm()

        async with request.form() as form:
            file_parts: List[Tuple[str, UploadFile]] = []
            for name, value in form.multi_items():
                if isinstance(value, UploadFile):
                    if value.filename:
                        file_parts.append((name, value))
                elif name in self.text_fields:
                    ingested.fields[name] = value

            # Reject the whole body before reading or writing anything
            self.check_file_parts(file_parts)
            for name, upload in file_parts:
                if upload.size is not None:
                    uploads.validate_size(name, upload.size)

            # Every part is read and size-checked before the first write
            contents: List[bytes] = []
            for name, upload in file_parts:
                content = await upload.read()
                uploads.validate_size(name, len(content))
                contents.append(content)

            for (name, upload), content in zip(file_parts, contents):
                stored = await uploads.store_upload(
                    field_name=name,
                    original_filename=upload.filename,
                    content=content,
                )
                ingested.files.setdefault(name, []).append(stored)

        logger.info(
            "Ingested multipart body: %d file(s) %s, text fields %s",
            sum(len(v) for v in ingested.files.values()),
            sorted(ingested.files),
            sorted(ingested.fields),
        )
        return ingested
