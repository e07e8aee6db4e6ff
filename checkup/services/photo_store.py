"""Photo storage: inline data URL or object-storage upload.

The mode is picked per call from the injected ObjectStorageConfig. When
object storage is configured the raw bytes go to the bucket and the caller
gets a URL plus key back; otherwise the image is downscaled, re-encoded as
JPEG and returned inline. A failed upload is an error, never a silent switch
to inline.
"""

from __future__ import annotations

import asyncio
import base64
import io
import logging
import re
import secrets
import time
from dataclasses import dataclass
from typing import Any, Union

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image, UnidentifiedImageError

from checkup.config import ObjectStorageConfig, PhotoPolicyConfig
from checkup.errors import FieldError, UploadError, ValidationError

logger = logging.getLogger(__name__)

_S3_PROVIDERS = ("aws-s3", "generic")


@dataclass(frozen=True)
class InlinePhoto:
    data_url: str


@dataclass(frozen=True)
class RemotePhoto:
    url: str
    key: str


PhotoLocation = Union[InlinePhoto, RemotePhoto]


@dataclass(frozen=True)
class StoredPhoto:
    filename: str
    mime_type: str
    size: int
    property_id: str
    location: PhotoLocation

    def as_dict(self) -> dict[str, Any]:
        """Wire shape accepted by the submission schema's photo entries."""
        out: dict[str, Any] = {
            "filename": self.filename,
            "mimeType": self.mime_type,
            "size": self.size,
            "propertyId": self.property_id,
        }
        if isinstance(self.location, RemotePhoto):
            out["url"] = self.location.url
            out["obsKey"] = self.location.key
        else:
            out["base64"] = self.location.data_url
        return out


def sanitize_filename(filename: str) -> str:
    return re.sub(r"[^a-zA-Z0-9.-]", "_", filename) or "photo"


def object_key(prefix: str, filename: str) -> str:
    """Namespaced key: prefix, millisecond timestamp, random token, filename."""
    stamp = int(time.time() * 1000)
    token = secrets.token_hex(4)
    key = f"{stamp}-{token}-{sanitize_filename(filename)}"
    prefix = prefix.strip("/")
    return f"{prefix}/{key}" if prefix else key


def public_url(config: ObjectStorageConfig, key: str) -> str:
    if config.public_url:
        return f"{config.public_url.rstrip('/')}/{key}"
    if config.endpoint:
        return f"{config.endpoint.rstrip('/')}/{config.bucket}/{key}"
    return f"https://{config.bucket}.s3.{config.region}.amazonaws.com/{key}"


class PhotoStore:
    """Stores one photo per call, inline or in the object store."""

    def __init__(
        self,
        storage: ObjectStorageConfig,
        policy: PhotoPolicyConfig,
        client: Any = None,
    ):
        self._storage = storage
        self._policy = policy
        self._client = client
        if storage.enabled and not storage.is_configured:
            logger.warning("Object storage is enabled but configuration is incomplete; storing photos inline")

    @property
    def max_file_size(self) -> int:
        return self._policy.max_file_size

    @property
    def remote_enabled(self) -> bool:
        """Capability probe: would store() upload to object storage?"""
        return self._storage.is_configured

    def check(self, mime_type: str, size: int) -> None:
        errors = []
        if mime_type not in self._policy.allowed_types:
            errors.append(FieldError(
                "file", f"Invalid file type. Allowed types: {', '.join(self._policy.allowed_types)}", "type",
            ))
        if size > self._policy.max_file_size:
            errors.append(FieldError(
                "file", f"File size exceeds {self._policy.max_file_size // (1024 * 1024)}MB limit", "size",
            ))
        if errors:
            raise ValidationError(errors, errors[0].message)

    async def store(self, data: bytes, filename: str, mime_type: str, property_id: str) -> StoredPhoto:
        self.check(mime_type, len(data))

        if self.remote_enabled:
            location: PhotoLocation = await self._upload(data, filename, mime_type)
            stored_type = mime_type
        else:
            location = await asyncio.to_thread(self._encode_inline, data)
            stored_type = "image/jpeg"

        return StoredPhoto(
            filename=filename,
            mime_type=stored_type,
            size=len(data),
            property_id=property_id,
            location=location,
        )

    # ── Object storage ───────────────────────────────────

    def _get_client(self):
        if self._client is None:
            cfg = self._storage
            self._client = boto3.client(
                "s3",
                endpoint_url=cfg.endpoint or None,
                region_name=cfg.region,
                aws_access_key_id=cfg.access_key_id,
                aws_secret_access_key=cfg.secret_access_key,
                config=BotoConfig(s3={"addressing_style": "path" if cfg.provider == "generic" else "auto"}),
            )
        return self._client

    async def _upload(self, data: bytes, filename: str, mime_type: str) -> RemotePhoto:
        cfg = self._storage
        if cfg.provider not in _S3_PROVIDERS:
            raise UploadError(f"Unsupported object storage provider: {cfg.provider}")

        try:
            client = self._get_client()
        except (BotoCoreError, ValueError) as e:
            logger.error("Object storage client rejected its configuration: %s", e)
            raise UploadError(f"Invalid object storage configuration: {e}") from e

        key = object_key(cfg.path_prefix, filename)
        try:
            await asyncio.to_thread(
                client.put_object,
                Bucket=cfg.bucket,
                Key=key,
                Body=data,
                ContentType=mime_type,
                ACL="public-read",
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("Object storage upload failed for key=%s", key)
            raise UploadError(f"Failed to upload to object storage: {e}") from e

        return RemotePhoto(url=public_url(cfg, key), key=key)

    # ── Inline ───────────────────────────────────────────

    def _encode_inline(self, data: bytes) -> InlinePhoto:
        p = self._policy
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError):
            raise ValidationError.single("file", "File is not a readable image", "unreadable") from None

        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        img.thumbnail((p.inline_max_width, p.inline_max_height))

        buf = io.BytesIO()
        img.save(buf, "JPEG", quality=p.inline_quality)
        encoded = base64.b64encode(buf.getvalue()).decode("ascii")
        return InlinePhoto(data_url=f"data:image/jpeg;base64,{encoded}")
