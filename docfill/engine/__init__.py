from docfill.engine.anchors import AnchorResolver
from docfill.engine.composer import DocumentComposer
from docfill.engine.geometry import RectConverter
from docfill.engine.layout import TextLayoutIndex
from docfill.engine.overlay import OverlayRenderer
from docfill.engine.table import TableColumns, TableRenderer

__all__ = [
    "AnchorResolver",
    "DocumentComposer",
    "OverlayRenderer",
    "RectConverter",
    "TableColumns",
    "TableRenderer",
    "TextLayoutIndex",
]
