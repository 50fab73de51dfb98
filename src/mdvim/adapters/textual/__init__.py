"""Textual adapter; import :mod:`mdvim.adapters.textual.app` for the demo UI."""

from .controller import TextualModalAdapter, TextualUIHooks

__all__ = ["TextualModalAdapter", "TextualUIHooks"]
