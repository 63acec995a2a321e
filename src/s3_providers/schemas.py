###############################################
# --- Provider records and option schemas --- #
###############################################

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StatResult(BaseModel):
    """File or directory attributes returned by ``FileSystemProvider.stat``."""
    path: str = Field(description="The path as given by the caller.")
    absolute_path: str = Field(
        description="The path as an ``s3://bucket/key`` URI.",
        json_schema_extra={"example": "s3://my-bucket/notes/a.txt"},
    )
    is_file: bool
    is_directory: bool
    is_symbolic_link: bool = False
    size: int = Field(0, description="Object size in bytes, 0 for directories.")
    modified: Optional[datetime] = None
    # S3 only tracks last-modified; these mirror it
    created: Optional[datetime] = None
    accessed: Optional[datetime] = None


class UploadResult(BaseModel):
    """Result of ``CDNProvider.upload``."""
    url: str = Field(description="Public URL of the uploaded object.")
    id: str = Field(description="Object key inside the bucket.")
    metadata: Optional[Dict[str, str]] = None


class DeleteResult(BaseModel):
    """Result of ``CDNProvider.delete``."""
    success: bool
    message: str


class S3FileSystemProviderOptions(BaseModel):
    """Options accepted by ``S3FileSystemProvider``."""
    bucket_name: str = Field(min_length=1, description="Bucket the filesystem is rooted at.")
    client_config: Optional[Dict[str, Any]] = Field(
        None,
        description="Keyword arguments passed through to boto3.client('s3', ...).",
    )

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "bucket_name": "my-bucket",
                "client_config": {"region_name": "us-east-1"},
            }
        },
    )


class S3CDNProviderOptions(BaseModel):
    """Options accepted by ``S3CDNProvider``."""
    bucket: str = Field(min_length=1)
    region: str = Field(min_length=1)
    access_key_id: str = Field(min_length=1)
    secret_access_key: str = Field(min_length=1)
    base_url: Optional[str] = Field(
        None,
        description="Public base URL. Defaults to https://{bucket}.s3.amazonaws.com",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v


class ProvidersConfig(BaseModel):
    """The host config map handed to ``register_providers``."""
    filesystem: Dict[str, S3FileSystemProviderOptions] = Field(default_factory=dict)
    cdn: Dict[str, S3CDNProviderOptions] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")
