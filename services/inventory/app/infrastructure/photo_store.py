"""Local-disk blob store for inventory photos."""

import os
import re
import uuid
from abc import ABC, abstractmethod

_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


class PhotoStore(ABC):

    @abstractmethod
    def save(self, data: bytes, original_filename: str) -> str:
        """Persist the blob and return the generated stored name."""


def safe_suffix(original_filename: str) -> str:
    """Extension of the caller's filename, or '' if it is not a plain extension."""
    _, ext = os.path.splitext(os.path.basename(original_filename or ""))
    return ext.lower() if _SAFE_SUFFIX.match(ext) else ""


class LocalPhotoStore(PhotoStore):
    """
    Writes photos into a single directory under a random name.

    Only the extension of the caller's filename is kept; the stored name is
    a uuid4 hex so it cannot collide with or escape the directory.
    """

    def __init__(self, directory: str):
        self.directory = directory

    def save(self, data: bytes, original_filename: str) -> str:
        os.makedirs(self.directory, exist_ok=True)
        stored_name = f"{uuid.uuid4().hex}{safe_suffix(original_filename)}"
        path = os.path.join(self.directory, stored_name)
        # "xb" refuses to overwrite an existing file
        with open(path, "xb") as fh:
            fh.write(data)
        return stored_name
