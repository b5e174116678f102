"""
Partner API - Stored Upload Schema
===================================

What:  Reference to a file written by the UploadService.
Who:   Produced by the multipart ingestion dependency, consumed by the
       partner handler (which persists `filename`).
"""

from pydantic import BaseModel, Field


class StoredUpload(BaseModel):
    field_name: str = Field(description="Form field the file arrived under")
    original_filename: str = Field(description="Filename as sent by the client")
    filename: str = Field(description="Generated name inside the upload directory")
    path: str = Field(description="Absolute path of the stored file")
    size: int = Field(description="Size in bytes")
    url: str = Field(description="URL path the file is served from")
