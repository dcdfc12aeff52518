from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratedDocument:
    """A composed letter ready for the output sink."""

    file_name: str
    content: bytes
    template_name: str
    page_count: int
