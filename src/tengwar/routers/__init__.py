"""Router package exports."""

from . import health, transcribe

__all__ = [
    "health",
    "transcribe",
]
