"""Discovery of the Star Citizen Game.log on the local machine.

The candidate table below is the set of install locations we know about.
Entries are checked in order and the first file that exists wins, so
appending is safe but reordering changes which install is picked when a
machine has more than one.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "Game.log"

WINDOWS_DRIVES: tuple[str, ...] = ("C:", "D:", "E:", "F:")

WINDOWS_SUBPATHS: tuple[str, ...] = (
    "Program Files/Roberts Space Industries/Star Citizen/LIVE/Game.log",
    "Roberts Space Industries/Star Citizen/LIVE/Game.log",
    "StarCitizen/LIVE/Game.log",
)

# Wine, Lutris and Proton prefixes, relative to the home directory
POSIX_HOME_SUBPATHS: tuple[str, ...] = (
    ".wine/drive_c/Program Files/Roberts Space Industries/Star Citizen/LIVE/Game.log",
    "Games/star-citizen/drive_c/Program Files/Roberts Space Industries/Star Citizen/LIVE/Game.log",
    ".local/share/lutris/runners/wine/star-citizen/Game.log",
)

# CrossOver bottle on macOS
MACOS_HOME_SUBPATHS: tuple[str, ...] = (
    "Library/Application Support/CrossOver/Bottles/Star Citizen/drive_c/Program Files/"
    "Roberts Space Industries/Star Citizen/LIVE/Game.log",
)

# Development fallback: a Game.log dropped in the project root
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


def _home_dir() -> str:
    return os.environ.get("HOME") or os.environ.get("USERPROFILE") or ""


def candidate_paths(home: str | None = None, fallback_dir: str | Path | None = None) -> list[str]:
    """Build the ordered list of places a Game.log may live.

    Args:
        home: Home directory; defaults to $HOME, then $USERPROFILE. Home
            relative candidates are skipped when it is empty.
        fallback_dir: Directory checked last; defaults to the project root.

    Returns:
        Candidate file paths in lookup order.
    """
    candidates: list[str] = []

    for drive in WINDOWS_DRIVES:
        for subpath in WINDOWS_SUBPATHS:
            candidates.append(str(Path(f"{drive}/") / subpath))

    home = _home_dir() if home is None else home
    if home:
        for subpath in POSIX_HOME_SUBPATHS + MACOS_HOME_SUBPATHS:
            candidates.append(str(Path(home) / subpath))

    fallback = PROJECT_ROOT if fallback_dir is None else Path(fallback_dir)
    candidates.append(str(fallback / LOG_FILE_NAME))

    return candidates


def locate(explicit_path: str | Path | None = None, candidates: Iterable[str] | None = None) -> str | None:
    """Find the log file to watch.

    An explicit path is returned as given, without checking that it exists;
    a bad path surfaces later as a watch setup failure.

    Args:
        explicit_path: Manually configured log location.
        candidates: Paths to probe instead of ``candidate_paths()``.

    Returns:
        The chosen path, or None when no candidate exists.
    """
    if explicit_path:
        return str(explicit_path)

    for candidate in candidate_paths() if candidates is None else candidates:
        if Path(candidate).exists():
            logger.info(f"Found game log at {candidate}")
            return candidate

    logger.debug("No game log found in any candidate location")
    return None
