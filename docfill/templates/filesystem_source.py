from pathlib import Path

from docfill.templates.base import BaseTemplateSource
from docfill.templates.exceptions import TemplateNotFound


class FilesystemTemplateSource(BaseTemplateSource):
    """Reads templates from a directory tree."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def fetch(self, name: str) -> bytes:
        path = self._resolve_path(name)
        if not path.is_file():
            raise TemplateNotFound(f"Template not found: {path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TemplateNotFound(f"Cannot read template {path}: {exc}") from exc

    def _resolve_path(self, name: str) -> Path:
        path = (self._root / name).resolve()
        if not path.is_relative_to(self._root.resolve()):
            raise TemplateNotFound(f"Template name escapes template root: {name}")
        return path
