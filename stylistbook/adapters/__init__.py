"""
Adapters layer - External collaborators (stylist directory).
"""

from .stylist_directory import InMemoryStylistDirectory, StylistDirectoryProtocol

__all__ = ["InMemoryStylistDirectory", "StylistDirectoryProtocol"]
