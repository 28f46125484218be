"""English to Tengwar (Annatar font) transcription."""

__version__ = "0.4.0"
