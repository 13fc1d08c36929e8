"""Editor estructural de formularios."""

from nexform.builder.drag import DragOperation, DragSource, FieldSource, LibrarySource
from nexform.builder.editor import FormBuilder
from nexform.builder.history import History

__all__ = [
    "DragOperation",
    "DragSource",
    "FieldSource",
    "LibrarySource",
    "FormBuilder",
    "History",
]
