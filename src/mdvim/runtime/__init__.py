"""Runtime services: telemetry, configuration, and the decay timer."""

from .config import EditorConfig
from .timer import DecayTimer

__all__ = ["EditorConfig", "DecayTimer"]
