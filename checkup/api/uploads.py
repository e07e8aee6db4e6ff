from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from checkup.dependencies import get_photo_store, require_reporter
from checkup.services.access import Caller
from checkup.services.photo_store import PhotoStore

router = APIRouter(prefix="/api/upload-image", tags=["uploads"])


@router.head("")
async def probe_object_storage(
    caller: Caller = Depends(require_reporter),
    store: PhotoStore = Depends(get_photo_store),
):
    """200 when photos go to object storage, 503 when they are stored inline."""
    return Response(status_code=200 if store.remote_enabled else 503)


@router.post("")
async def upload_image(
    file: UploadFile = File(...),
    property_id: str = Form("", alias="propertyId"),
    caller: Caller = Depends(require_reporter),
    store: PhotoStore = Depends(get_photo_store),
):
    mime_type = file.content_type or ""
    store.check(mime_type, file.size or 0)

    # One byte past the limit is enough for store() to reject it.
    data = await file.read(store.max_file_size + 1)
    stored = await store.store(data, file.filename or "photo", mime_type, property_id)
    return {"success": True, **stored.as_dict()}
