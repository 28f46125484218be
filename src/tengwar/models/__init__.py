from .alignment import AlignmentEntry

__all__ = ["AlignmentEntry"]
