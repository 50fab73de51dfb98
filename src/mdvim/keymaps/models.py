"""Dataclasses describing direct-shortcut bindings and their actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

from mdvim.modes.base_mode import normalize_modifiers, stroke_token


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized chord a binding listens for."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return stroke_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Parse ``"ctrl+b"``-style tokens; the last segment is the key."""

        if token.endswith("++"):
            return cls("+", tuple(token[:-2].split("+")))
        *modifiers, key = token.split("+")
        return cls(key, tuple(modifiers))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable registered under a stable id."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a stroke in a given mode with an action."""

    id: str
    mode: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def key_signature(self) -> str:
        return self.stroke.token


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Binding found for a stroke, paired with its action."""

    binding: Binding
    action: ActionRef


__all__ = ["KeyStroke", "ActionRef", "Binding", "ResolutionMatch"]
