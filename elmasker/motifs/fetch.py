"""
Retrieval of the ELM motif library.

The class and instance tables are downloaded over HTTP and kept in an
on-disk cache so repeated runs do not hit the ELM server. Local files can be
used instead of the network, which is what offline runs and the tests do.

Any failure to obtain the library is fatal: there is nothing meaningful to
annotate without it.
"""

from __future__ import annotations

import logging
import sqlite3
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from diskcache import Cache

from .library import LibraryError, LibraryUnavailableError, MotifLibrary

logger = logging.getLogger(__name__)


ELM_CLASSES_URL = "http://elm.eu.org/elms/elms_index.tsv"
ELM_INSTANCES_URL = "http://elm.eu.org/instances.tsv?q=*"


@dataclass
class LibrarySource:
    """
    Where and how to obtain the motif library.

    Attributes:
        classes_url: URL of the class definitions table
        instances_url: URL of the instance definitions table
        use_cache: Keep downloads in an on-disk cache
        cache_dir: Cache location (default ~/.cache/elmasker)
        cache_ttl: Seconds before a cached download is fetched again
        timeout_seconds: HTTP timeout per request
    """
    classes_url: str = ELM_CLASSES_URL
    instances_url: Optional[str] = ELM_INSTANCES_URL
    use_cache: bool = True
    cache_dir: Optional[Path] = None
    cache_ttl: int = 86400 * 30  # 30 days
    timeout_seconds: float = 60.0

    def __post_init__(self):
        if self.cache_dir is None:
            self.cache_dir = Path.home() / ".cache" / "elmasker"


def fetch_text(url: str, source: Optional[LibrarySource] = None) -> str:
    """
    Download a text resource, going through the on-disk cache.

    Raises:
        LibraryUnavailableError: If the resource cannot be retrieved
    """
    source = source or LibrarySource()

    if not source.use_cache:
        return _download(url, source.timeout_seconds)

    try:
        source.cache_dir.mkdir(parents=True, exist_ok=True)
        with Cache(str(source.cache_dir)) as cache:
            cached = cache.get(url)
            if cached is not None:
                logger.debug(f"Using cached copy of {url}")
                return cached

            text = _download(url, source.timeout_seconds)
            cache.set(url, text, expire=source.cache_ttl)
    except (OSError, sqlite3.Error) as e:
        raise LibraryUnavailableError(
            f"Download cache {source.cache_dir} unusable for {url}: {e}"
        ) from e

    return text


def _download(url: str, timeout: float) -> str:
    try:
        logger.info(f"Downloading {url}")
        with urllib.request.urlopen(url, timeout=timeout) as response:
            return response.read().decode("utf-8")
    except (urllib.error.URLError, OSError, UnicodeDecodeError) as e:
        raise LibraryUnavailableError(f"Could not retrieve {url}: {e}") from e


def _read_local(path: Union[str, Path]) -> str:
    try:
        return Path(path).read_text()
    except OSError as e:
        raise LibraryUnavailableError(f"Could not read {path}: {e}") from e


def load_library(
    source: Optional[LibrarySource] = None,
    classes_path: Optional[Union[str, Path]] = None,
    instances_path: Optional[Union[str, Path]] = None,
    protein_sequences: Optional[Mapping[str, str]] = None,
) -> MotifLibrary:
    """
    Load the motif library from local files or from the network.

    Local paths take precedence over the URLs in ``source``. Instances are
    optional only in the sense that ``source.instances_url`` may be None.

    ELM instance tables carry coordinates but not residues, so instance
    sequences (needed by the logic filter) are sliced from
    ``protein_sequences``, a primary accession -> sequence mapping.

    Raises:
        LibraryUnavailableError: If the library cannot be obtained or parsed
    """
    source = source or LibrarySource()

    if classes_path is not None:
        classes_text = _read_local(classes_path)
        classes_origin = str(classes_path)
    else:
        classes_text = fetch_text(source.classes_url, source)
        classes_origin = source.classes_url

    instances_text = None
    if instances_path is not None:
        instances_text = _read_local(instances_path)
    elif source.instances_url:
        instances_text = fetch_text(source.instances_url, source)

    try:
        return MotifLibrary.from_tsv(classes_text, instances_text, protein_sequences)
    except LibraryError as e:
        raise LibraryUnavailableError(f"Malformed motif library from {classes_origin}: {e}") from e
