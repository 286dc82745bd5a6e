"""
Motif library handling and motif matching.
"""

from .fetch import ELM_CLASSES_URL, ELM_INSTANCES_URL, LibrarySource, fetch_text, load_library
from .library import LibraryError, LibraryUnavailableError, MotifLibrary, MotifPatternError
from .matcher import FilterConfig, assign

__all__ = [
    "MotifLibrary",
    "LibraryError",
    "LibraryUnavailableError",
    "MotifPatternError",
    "LibrarySource",
    "ELM_CLASSES_URL",
    "ELM_INSTANCES_URL",
    "fetch_text",
    "load_library",
    "FilterConfig",
    "assign",
]
