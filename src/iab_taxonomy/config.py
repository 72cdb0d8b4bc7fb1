"""Configuration constants for the IAB taxonomy browser."""

import os
from pathlib import Path

from iab_taxonomy.models.record import DatasetKind

# Environment variable pointing at a directory with the taxonomy TSV files.
DATA_DIR_ENV: str = "IAB_TAXONOMY_DIR"

# Taxonomy files shipped with the package.
BUNDLED_DATA_DIR: Path = Path(__file__).parent / "data"

# Directory with data. First directory holding every taxonomy file is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/iab-taxonomy").expanduser(),
    BUNDLED_DATA_DIR,
]

# Rows moved by PgUp/PgDn.
PAGE_SIZE: int = 10

# Where the browser logs while the terminal is taken over by the UI.
DEFAULT_LOG_FILE: Path = Path("~/.cache/iab-taxonomy/browse.log").expanduser()

TAXONOMY_URL: str = "https://github.com/InteractiveAdvertisingBureau/Taxonomies"


def _is_complete(directory: Path) -> bool:
    return directory.is_dir() and all((directory / kind.filename).is_file() for kind in DatasetKind)


def data_directory_candidates() -> list[Path]:
    """Candidate data directories in priority order."""
    candidates = list(DATA_DIRECTORIES)
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        candidates.insert(0, Path(env_dir).expanduser())
    return candidates


def resolve_data_directory(explicit: Path | None = None) -> Path:
    """Return the directory to load taxonomies from.

    An explicit directory is returned as-is; missing files then surface when loading.
    """
    if explicit is not None:
        return explicit.expanduser()

    candidates = data_directory_candidates()
    for candidate in candidates:
        if _is_complete(candidate):
            return candidate

    msg = f"Cannot find taxonomy data, none of those directories is complete: {candidates!r}"
    raise FileNotFoundError(msg)
