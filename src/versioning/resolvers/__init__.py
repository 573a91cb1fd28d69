"""Version resolvers for the supported dependency managers."""

from .cocoapods import CocoaPodsResolver

__all__ = [
    "CocoaPodsResolver",
]
