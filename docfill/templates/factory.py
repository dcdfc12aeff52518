from pathlib import Path

from docfill.config.settings import Settings
from docfill.templates.base import BaseTemplateSource
from docfill.templates.filesystem_source import FilesystemTemplateSource
from docfill.templates.http_source import HttpTemplateSource


class TemplateSourceFactory:
    """Creates the configured template source."""

    @classmethod
    def create(cls, settings: Settings) -> BaseTemplateSource:
        source = settings.template_source.lower()
        if source == "filesystem":
            return FilesystemTemplateSource(Path(settings.template_root))
        if source == "http":
            base_url = settings.template_base_url.strip()
            if not base_url:
                raise ValueError("template_base_url is required for template_source=http")
            return HttpTemplateSource(
                base_url=base_url,
                timeout_seconds=settings.template_fetch_timeout_seconds,
            )
        raise ValueError(
            f"Unknown template source '{source}'. Choose from: ['filesystem', 'http']"
        )
