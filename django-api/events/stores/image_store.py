"""Image stores: where uploaded event banners end up."""

import logging
import mimetypes
import uuid
from pathlib import PurePosixPath
from urllib.parse import urljoin

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.core.files import File
from django.core.files.storage import default_storage

from events.domain.errors import ImageUploadError
from events.stores.interfaces import ImageStore

logger = logging.getLogger(__name__)


def object_key(folder: str, filename: str) -> str:
    """Return a collision-free key under ``folder`` keeping the file extension."""
    suffix = PurePosixPath(filename or "").suffix.lower()
    return f"{folder.strip('/')}/{uuid.uuid4().hex}{suffix}"


def content_type_of(image: File) -> str:
    declared = getattr(image, "content_type", None)
    if declared:
        return declared
    guessed, _ = mimetypes.guess_type(image.name or "")
    return guessed or "application/octet-stream"


class S3ImageStore(ImageStore):
    """Uploads images to an S3 bucket and returns their public object URL."""

    def __init__(
        self,
        client=None,
        bucket: str | None = None,
        region: str | None = None,
        folder: str | None = None,
        public_url: str | None = None,
    ) -> None:
        self._region = region or settings.AWS_S3_REGION_NAME
        self._client = client
        self._bucket = bucket or settings.AWS_STORAGE_BUCKET_NAME
        self._folder = folder or settings.IMAGE_UPLOAD_FOLDER
        self._public_url = public_url if public_url is not None else settings.AWS_S3_PUBLIC_URL

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=self._region,
            )
        return self._client

    def upload(self, image: File) -> str:
        key = object_key(self._folder, image.name)
        try:
            image.seek(0)
            self.client.upload_fileobj(
                image,
                self._bucket,
                key,
                ExtraArgs={"ContentType": content_type_of(image)},
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error(f"S3 upload of {key} to {self._bucket} failed: {exc}")
            raise ImageUploadError(f"Image upload failed: {exc}") from exc
        logger.info(f"Uploaded image {key} to bucket {self._bucket}")
        return self.url_for(key)

    def url_for(self, key: str) -> str:
        if self._public_url:
            return f"{self._public_url.rstrip('/')}/{key}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"


class DjangoStorageImageStore(ImageStore):
    """Saves images through Django's default storage; meant for local development."""

    def __init__(self, storage=None, folder: str | None = None, base_url: str | None = None) -> None:
        self._storage = storage or default_storage
        self._folder = folder or settings.IMAGE_UPLOAD_FOLDER
        self._base_url = base_url or settings.PUBLIC_BASE_URL

    def upload(self, image: File) -> str:
        try:
            name = self._storage.save(object_key(self._folder, image.name), image)
        except OSError as exc:
            logger.error(f"Saving image {image.name} failed: {exc}")
            raise ImageUploadError(f"Image upload failed: {exc}") from exc
        return urljoin(self._base_url, self._storage.url(name))
