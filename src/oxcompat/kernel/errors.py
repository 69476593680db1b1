"""Exceptions raised at the parse boundaries of the kernel.

Compatibility checks, upgrade analysis and path search never raise for a
negative outcome; they return structured results. Only malformed input
(version strings, requirement strings, manifests) raises.
"""


class OxCompatError(Exception):
    """Base exception for oxcompat errors."""
    pass


class VersionParseError(OxCompatError, ValueError):
    """Raised when a version or version requirement string cannot be parsed."""
    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid version string '{text}': {reason}")


class ManifestParseError(OxCompatError):
    """Raised when a component manifest cannot be parsed or validated."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Failed to parse manifest: {message}")
