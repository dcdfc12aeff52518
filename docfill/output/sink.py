import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from docfill.logging.logger import Log


class BaseOutputSink(ABC):
    """Receives the finished document; the engine never writes output itself."""

    @abstractmethod
    def deliver(self, file_name: str, content: bytes) -> None:
        """Hand over a complete document. Never called with partial output."""


class FilesystemSink(BaseOutputSink):
    """Saves documents into a directory.

    The bytes go to a temporary file next to the target which is then renamed
    over it, so a failed write never leaves a truncated PDF behind.
    """

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    def deliver(self, file_name: str, content: bytes) -> None:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / Path(file_name).name
        fd, temp_name = tempfile.mkstemp(dir=self._output_dir, prefix=".", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
        Log.info("Saved document", path=str(path), size=len(content))
