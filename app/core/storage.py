import os
import uuid
import boto3
import logging
import traceback
from typing import Optional
from fastapi import UploadFile

from .config import settings
from .exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

# Leading bytes of each accepted image format -> (content type, file extension)
IMAGE_SIGNATURES = [
    (b"\xff\xd8\xff", "image/jpeg", ".jpg"),
    (b"\x89PNG\r\n\x1a\n", "image/png", ".png"),
    (b"GIF87a", "image/gif", ".gif"),
    (b"GIF89a", "image/gif", ".gif"),
]

def detect_image_type(content: bytes) -> Optional[tuple]:
    """Sniff the image format from its first bytes; None when not an accepted image"""
    for signature, content_type, extension in IMAGE_SIGNATURES:
        if content.startswith(signature):
            return content_type, extension
    return None

def validate_image(content: bytes, max_size: int = None) -> tuple:
    """Check an uploaded image's size and type, returning (content type, extension)"""
    max_size = max_size or settings.MAX_IMAGE_SIZE
    if len(content) > max_size:
        raise ValidationError(f"The image is too large, maximum size is {max_size // (1024 * 1024)} MB")

    detected = detect_image_type(content)
    if not detected:
        raise ValidationError("Unsupported image type, allowed types are JPEG, PNG, and GIF")
    return detected


class ImageStorage:
    """Stores post images in Cloudflare R2, or in the local upload directory when R2 is not configured"""

    def __init__(self, upload_directory: str = None):
        self.client = None
        self.upload_directory = upload_directory or settings.UPLOAD_DIRECTORY
        self.bucket = settings.R2_BUCKET_NAME
        self.public_url = settings.R2_PUBLIC_URL

        if all([settings.R2_ENDPOINT, settings.R2_ACCESS_KEY_ID, settings.R2_SECRET_ACCESS_KEY]):
            try:
                logger.info(f"Creating S3 client for R2 bucket '{self.bucket}'")
                self.client = boto3.client(
                    's3',
                    endpoint_url=settings.R2_ENDPOINT,
                    aws_access_key_id=settings.R2_ACCESS_KEY_ID,
                    aws_secret_access_key=settings.R2_SECRET_ACCESS_KEY
                )
            except Exception as e:
                logger.error(f"Failed to create S3 client: {str(e)}")
                logger.error(traceback.format_exc())
                logger.warning("Falling back to local image storage")
        else:
            logger.info(f"R2 storage not configured, images are stored under '{self.upload_directory}'")

    async def save_image(self, file: UploadFile, prefix: str = "post_images") -> str:
        """Validate and store an uploaded image, returning the path or URL to render"""
        content = await file.read()
        content_type, extension = validate_image(content)
        unique_filename = f"{uuid.uuid4().hex}{extension}"
        logger.info(f"Storing image '{file.filename}' ({len(content)} bytes) as {unique_filename}")

        if self.client:
            return self._upload_to_r2(content, content_type, f"{prefix}/{unique_filename}")
        return self._save_locally(content, unique_filename)

    def _upload_to_r2(self, content: bytes, content_type: str, key: str) -> str:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type
            )
        except Exception as e:
            logger.error(f"Failed to upload to R2: {str(e)}")
            logger.error(traceback.format_exc())
            raise StorageError("Failed to save the image") from e
        return f"{self.public_url}/{key}" if self.public_url else key

    def _save_locally(self, content: bytes, filename: str) -> str:
        try:
            os.makedirs(self.upload_directory, exist_ok=True)
            with open(os.path.join(self.upload_directory, filename), "wb") as out_file:
                out_file.write(content)
        except OSError as e:
            logger.error(f"Failed to save image locally: {str(e)}")
            raise StorageError("Failed to save the image") from e
        return f"/uploads/{filename}"

    def delete_image(self, path: str) -> bool:
        """Remove a stored image, used when the post that referenced it could not be created"""
        if not path:
            return False
        try:
            if self.client:
                key = path.replace(f"{self.public_url}/", "") if self.public_url else path
                self.client.delete_object(Bucket=self.bucket, Key=key)
            else:
                local_path = os.path.join(self.upload_directory, os.path.basename(path))
                if os.path.exists(local_path):
                    os.remove(local_path)
            return True
        except Exception as e:
            logger.error(f"Failed to delete image {path}: {str(e)}")
            return False

# Global instance for app-wide usage
image_storage = ImageStorage()
