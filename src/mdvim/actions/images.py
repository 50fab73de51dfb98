"""Markdown image links: copy a picture next to the note and link it in."""

from __future__ import annotations

import re
import shutil
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Protocol
from urllib.parse import unquote, urlparse

from mdvim.modes.base_mode import ModeContext
from mdvim.runtime import telemetry

IMAGE_SUFFIXES = frozenset(
    {"bmp", "gif", "jpeg", "jpg", "png", "svg", "tif", "tiff", "webp"}
)
IMAGE_DIR_NAME = "images"

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


class ImageHost(Protocol):
    """What the editor view supplies to the image inserter."""

    @property
    def image_folder(self) -> Path: ...

    def on_image_inserted(self, file_name: str) -> None: ...


def image_markdown(title: str, target: str) -> str:
    return f"![{title}]({target})"


def generate_image_file_name(folder: Path, title: str, suffix: str = "png") -> str:
    """``<slug>_<8 hex>.<suffix>``, re-rolled until it is free in ``folder``."""

    stem = _UNSAFE.sub("_", title).strip("_")[:40] or "image"
    suffix = suffix.lstrip(".").lower() or "png"
    while True:
        name = f"{stem}_{uuid.uuid4().hex[:8]}.{suffix}"
        if not (folder / name).exists():
            return name


def is_image_path(path: str) -> bool:
    return Path(path).suffix.lstrip(".").lower() in IMAGE_SUFFIXES


def insert_image_from_path(
    context: ModeContext, host: ImageHost, title: str, source: Path
) -> Optional[str]:
    """Copy ``source`` into the host's image folder and link it at the cursor.

    Returns the new file name, or ``None`` when the copy failed.
    """

    folder = Path(host.image_folder)
    file_name = generate_image_file_name(folder, title, source.suffix)
    target = folder / file_name
    try:
        folder.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as exc:
        telemetry.record_event(
            "image.copy_failed",
            level="warning",
            data={"source": str(source), "target": str(target), "error": str(exc)},
        )
        return None

    with context.buffer.edit_group("image::insert"):
        context.buffer.insert_text(
            image_markdown(title, f"{IMAGE_DIR_NAME}/{file_name}")
        )
    telemetry.record_event("image.inserted", data={"file": file_name})
    host.on_image_inserted(file_name)
    return file_name


def insert_urls(
    context: ModeContext, host: ImageHost, urls: Iterable[str]
) -> List[str]:
    """Insert dropped URLs; returns the names of images copied in.

    Local image files are copied and linked, remote images are linked in
    place, and every other URL is inserted as plain text.
    """

    inserted: List[str] = []
    for url in urls:
        parsed = urlparse(url)
        local = parsed.scheme in ("", "file")
        path = unquote(parsed.path) if local else url
        if local and is_image_path(path) and Path(path).is_file():
            name = insert_image_from_path(context, host, Path(path).stem, Path(path))
            if name is not None:
                inserted.append(name)
            continue
        if not local and is_image_path(parsed.path):
            with context.buffer.edit_group("image::link"):
                context.buffer.insert_text(image_markdown(Path(parsed.path).stem, url))
            continue
        context.buffer.insert_text(path)
    return inserted


def _is_url_or_file(line: str) -> bool:
    parsed = urlparse(line)
    if parsed.scheme in ("http", "https"):
        return bool(parsed.netloc)
    if parsed.scheme == "file":
        return bool(parsed.path)
    try:
        return Path(line).exists()
    except (OSError, ValueError):
        return False


def paste_text(context: ModeContext, host: ImageHost, text: str) -> List[str]:
    """Insert pasted text, treating it as a URL drop only when every line is one.

    A paste whose non-blank lines are all URLs or existing paths goes through
    :func:`insert_urls`; anything else is inserted verbatim as one edit.
    """

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if lines and all(_is_url_or_file(line) for line in lines):
        with context.buffer.edit_group("paste::urls"):
            return insert_urls(context, host, lines)
    with context.buffer.edit_group("paste"):
        context.buffer.insert_text(text)
    return []


__all__ = [
    "IMAGE_SUFFIXES",
    "ImageHost",
    "generate_image_file_name",
    "image_markdown",
    "insert_image_from_path",
    "insert_urls",
    "is_image_path",
    "paste_text",
]
