import uuid
import logging
from typing import Optional
from fastapi import HTTPException, UploadFile
from supabase import Client
from savorycircle.config import settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


async def read_upload(file: UploadFile, limit: Optional[int] = None) -> bytes:
    """Read an upload, giving up with 413 as soon as it passes the size cap"""
    limit = settings.max_upload_bytes if limit is None else limit
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise HTTPException(status_code=413, detail="Image is too large")
    return content


class ImageStorage:
    """Uploads images into a Supabase storage bucket under the owner's folder."""

    def __init__(self, supabase: Client, bucket: str):
        self.supabase = supabase
        self.bucket = bucket

    def upload_image(self, user_id: str, file_content: bytes, content_type: str) -> str:
        """Upload and return the public URL"""
        extension = ALLOWED_IMAGE_TYPES.get(content_type or "")
        if not extension:
            raise HTTPException(status_code=400, detail="Only JPEG, PNG, GIF and WebP images are allowed")
        if not file_content:
            raise HTTPException(status_code=400, detail="Empty file")
        if len(file_content) > settings.max_upload_bytes:
            raise HTTPException(status_code=413, detail="Image is too large")

        key = f"{user_id}/{uuid.uuid4().hex}.{extension}"
        try:
            self.supabase.storage.from_(self.bucket).upload(
                key, file_content, {"content-type": content_type}
            )
            public_url = self.supabase.storage.from_(self.bucket).get_public_url(key)
        except Exception as e:
            logger.error(f"Failed to upload file to bucket {self.bucket}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to upload image")
        logger.info("Uploaded %s to bucket %s", key, self.bucket)
        return public_url
