"""Keymap registry storing actions and single-stroke bindings per mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from mdvim.runtime.telemetry import span

from .models import ActionRef, Binding, ResolutionMatch


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding claims a stroke another binding already owns."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on '{binding.key_signature}' in mode '{binding.mode}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and the ``mode -> token -> binding`` index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._index: Dict[str, Dict[str, str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            existing = self.lookup_binding(binding.mode, binding.key_signature)
            if existing is not None and existing.id != binding.id:
                if not replace:
                    raise KeymapConflictError(binding, existing)
                self._drop(existing)
            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._drop(self._bindings[binding.id])

            self._bindings[binding.id] = binding
            self._index.setdefault(binding.mode, {})[binding.key_signature] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def lookup_binding(self, mode: str, token: str) -> Optional[Binding]:
        binding_id = self._index.get(mode, {}).get(token)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def resolve(self, mode: str, token: str) -> Optional[ResolutionMatch]:
        binding = self.lookup_binding(mode, token)
        if binding is None:
            return None
        return ResolutionMatch(binding=binding, action=self.get_action(binding.action_id))

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._index.get(mode, {}).values():
            yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._index)),
        )

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        bucket = self._index.get(binding.mode)
        if not bucket:
            return
        if bucket.get(binding.key_signature) == binding.id:
            del bucket[binding.key_signature]
        if not bucket:
            del self._index[binding.mode]


__all__ = ["KeymapRegistry", "KeymapConflictError", "RegistryStats"]
