from abc import ABC, abstractmethod
from collections.abc import Sequence

from docfill.logging.logger import Log
from docfill.templates.exceptions import TemplateNotFound


class BaseTemplateSource(ABC):
    """Contract for template byte sources."""

    @abstractmethod
    def fetch(self, name: str) -> bytes:
        """Return the bytes of the template stored under ``name``.

        Args:
            name: Relative template path, e.g. ``"notificação/PRATI_04tl.pdf"``.

        Raises:
            TemplateNotFound: if the template is missing or cannot be read.
        """

    def close(self) -> None:
        """Release any resources held by the source."""

    def fetch_first(self, names: Sequence[str]) -> tuple[str, bytes]:
        """Fetch the first candidate that exists.

        Raises:
            TemplateNotFound: if no candidate could be fetched.
        """
        for name in names:
            try:
                content = self.fetch(name)
            except TemplateNotFound as exc:
                Log.debug("Template candidate unavailable", template=name, reason=str(exc))
                continue
            Log.info("Loaded template", template=name, size=len(content))
            return name, content
        raise TemplateNotFound(f"none of the template candidates exist: {list(names)}")
