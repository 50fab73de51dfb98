"""Editor settings consumed by the dispatcher and shortcuts."""

from __future__ import annotations

from dataclasses import dataclass, replace

from . import telemetry

DEFAULT_TAB_WIDTH = 4
DEFAULT_DECAY_MS = 2000


def _env_int(name: str, fallback: int, *, minimum: int = 0) -> int:
    raw = telemetry.env(name)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value >= minimum else fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tab handling and the modal decay duration.

    ``expand_tab`` makes Tab insert ``tab_spaces`` instead of a literal tab,
    and lets Shift+Tab strip up to ``tab_width`` leading spaces at once.
    """

    expand_tab: bool = True
    tab_width: int = DEFAULT_TAB_WIDTH
    decay_ms: int = DEFAULT_DECAY_MS

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError("tab_width must be positive")
        if self.decay_ms <= 0:
            raise ValueError("decay_ms must be positive")

    @property
    def tab_spaces(self) -> str:
        return " " * self.tab_width

    @property
    def indent_text(self) -> str:
        return self.tab_spaces if self.expand_tab else "\t"

    @classmethod
    def from_env(cls) -> "EditorConfig":
        """Build a config from ``MDVIM_EXPAND_TAB``, ``MDVIM_TAB_WIDTH`` and
        ``MDVIM_DECAY_MS``; unparsable values keep their defaults."""

        return cls(
            expand_tab=telemetry.env_flag("EXPAND_TAB", True),
            tab_width=_env_int("TAB_WIDTH", DEFAULT_TAB_WIDTH, minimum=1),
            decay_ms=_env_int("DECAY_MS", DEFAULT_DECAY_MS, minimum=1),
        )

    def with_overrides(self, **changes: object) -> "EditorConfig":
        return replace(self, **changes)


__all__ = ["EditorConfig", "DEFAULT_TAB_WIDTH", "DEFAULT_DECAY_MS"]
