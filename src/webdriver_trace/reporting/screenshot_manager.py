"""
Screenshot Manager - Capture and organize screenshots during a test case.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Protocol
import logging

logger = logging.getLogger(__name__)


class ScreenshotCapturer(Protocol):
    """Anything that can produce a screenshot artifact on disk."""

    def capture(self) -> Path:
        ...


@dataclass
class Screenshot:
    """
    A captured screenshot.

    Attributes:
        path: File path to the screenshot
        index: Running number within the run
        timestamp: When the screenshot was taken
    """
    path: Path
    index: int
    timestamp: datetime


class ScreenshotManager:
    """
    Write screenshots produced by a PNG source to an output directory.

    Example:
        >>> manager = ScreenshotManager("./screenshots", run_id="abc", source=driver.screenshot_for_recording)
        >>> path = manager.capture()
    """

    def __init__(
        self,
        output_dir: str | Path,
        run_id: str,
        source: Optional[Callable[[], bytes]] = None,
        format: str = "png",
    ):
        """
        Initialize the screenshot manager.

        Args:
            output_dir: Directory to save screenshots
            run_id: Unique run identifier, used as subdirectory
            source: Callable returning the PNG bytes of the current page
            format: Image format
        """
        self.output_dir = Path(output_dir) / run_id
        self.run_id = run_id
        self.source = source
        self.format = format
        self._screenshots: list[Screenshot] = []

    def capture(self) -> Path:
        """
        Capture a screenshot.

        Returns:
            Path of the written file

        Raises:
            RuntimeError: If no source has been configured
        """
        if self.source is None:
            raise RuntimeError("ScreenshotManager has no screenshot source")

        png = self.source()
        self.output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now()
        index = len(self._screenshots) + 1
        filename = f"screenshot_{index:03d}_{timestamp.strftime('%H%M%S')}.{self.format}"
        path = self.output_dir / filename
        path.write_bytes(png)

        self._screenshots.append(Screenshot(path=path, index=index, timestamp=timestamp))
        logger.debug(f"Captured screenshot: {path}")
        return path

    def get_screenshots(self) -> list[Screenshot]:
        """Get all captured screenshots."""
        return self._screenshots.copy()
