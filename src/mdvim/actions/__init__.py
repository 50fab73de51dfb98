"""Editing verbs bound to direct shortcuts, plus the image-link inserter."""

from .images import ImageHost, insert_image_from_path, insert_urls, paste_text
from .shortcuts import (
    cancel_bracket,
    cancel_escape,
    delete_previous_char,
    delete_previous_word,
    delete_to_line_start,
    enter_composing,
    indent,
    outdent,
    wrap_bold,
    wrap_italic,
)

__all__ = [
    "ImageHost",
    "cancel_bracket",
    "cancel_escape",
    "delete_previous_char",
    "delete_previous_word",
    "delete_to_line_start",
    "enter_composing",
    "indent",
    "insert_image_from_path",
    "insert_urls",
    "outdent",
    "paste_text",
    "wrap_bold",
    "wrap_italic",
]
