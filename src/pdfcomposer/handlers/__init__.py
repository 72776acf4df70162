# Reexport all handlers

from .render import handle_render_document

__all__ = [
    "handle_render_document",
]
