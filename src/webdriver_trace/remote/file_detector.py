"""
File Detectors - Decide whether typed keys name a local file to upload.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class FileDetector(ABC):
    """Map keys typed into an element to a local file, if they name one."""

    @abstractmethod
    def get_local_file(self, keys: str) -> Optional[Path]:
        ...


class UselessFileDetector(FileDetector):
    """Never detects a file. The default: keys are always typed as-is."""

    def get_local_file(self, keys: str) -> Optional[Path]:
        return None


class LocalFileDetector(FileDetector):
    """Detect keys that are the path of an existing local file."""

    def get_local_file(self, keys: str) -> Optional[Path]:
        if not keys:
            return None
        path = Path(keys)
        if path.is_file():
            return path
        return None
