from typing import Optional

from shared.core import get_logger
from app.infrastructure.photo_store import PhotoStore
from .results import Uploaded, ValidationFailed, UploadResult

logger = get_logger(__name__)

PHOTO_URL_SEGMENT = "/images/inventory/"

class PhotoUploadHandler:
    """Stores an uploaded photo and returns the URL it is served from.

    The URL is handed back to the caller, who puts it into a create/update
    request; inventory records are never touched here.
    """

    def __init__(self, store: PhotoStore, base_url: str, max_bytes: int):
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.max_bytes = max_bytes

    def upload(self, data: Optional[bytes], filename: Optional[str]) -> UploadResult:
        if not data:
            return ValidationFailed.single("file", "No file uploaded")
        if len(data) > self.max_bytes:
            return ValidationFailed.single("file", f"File exceeds {self.max_bytes} bytes")

        stored_name = self.store.save(data, filename or "")
        url = f"{self.base_url}{PHOTO_URL_SEGMENT}{stored_name}"
        logger.info(
            f"Inventory photo stored: {stored_name}",
            extra={'extra_fields': {'size_bytes': len(data), 'url': url}}
        )
        return Uploaded(url)
