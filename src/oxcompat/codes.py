"""Closed enumerations shared by the kernel and the public API.

These constants prevent stringly-typed component kinds and compatibility
levels from leaking into client code.
"""

from enum import Enum


class ComponentType(str, Enum):
    """Kinds of versioned components in the OxideKit ecosystem."""

    CORE = "core"  # Runtime
    PLUGIN = "plugin"  # Extends functionality
    THEME = "theme"  # Styling and appearance
    STARTER = "starter"  # Project scaffolding template

    def __str__(self) -> str:
        return self.value


_LEVEL_PHRASES = {
    "full": "compatible",
    "partial": "partially compatible",
    "unknown": "unknown compatibility",
    "none": "incompatible",
}


class CompatibilityLevel(str, Enum):
    """Coarse classification of a single compatibility decision.

    The checker currently emits only FULL and NONE. PARTIAL (compatible with
    warnings) and UNKNOWN (unable to verify) are reserved for producers that
    can make those distinctions.
    """

    FULL = "full"
    PARTIAL = "partial"
    UNKNOWN = "unknown"
    NONE = "none"

    @property
    def phrase(self) -> str:
        return _LEVEL_PHRASES[self.value]

    def __str__(self) -> str:
        return self.phrase
