import logging
import re
import subprocess
from pathlib import Path

from .types import MediaInfo

logger = logging.getLogger(__name__)

_DURATION = re.compile(r"duration\s+:\s+(\d+)", re.IGNORECASE)
_INTERLACED = re.compile(r"scan type\s+:\s+interlaced", re.IGNORECASE)
_WIDTH_1440 = re.compile(r"width\s+:\s+1440\b", re.IGNORECASE)


def parse_mediainfo(output: str) -> MediaInfo:
    """Pull the fields the benchmark cares about out of ``mediainfo --full``.

    Only the first duration is used (the general section, in milliseconds).
    1440 wide sources are anamorphic HD and need the test's scaling option.
    """
    duration_s = None
    interlaced = False
    needs_scaling = False

    for line in output.splitlines():
        line = line.strip()

        match = _DURATION.search(line)
        if match and duration_s is None:
            duration_s = int(match.group(1)) // 1000

        if _INTERLACED.search(line):
            interlaced = True

        if _WIDTH_1440.search(line):
            needs_scaling = True

    return MediaInfo(duration_s, interlaced, needs_scaling)


def inspect_media(path: str | Path, *, executable: str = "mediainfo") -> MediaInfo:
    logger.debug("Running %s on %s", executable, path)
    try:
        result = subprocess.run(
            [executable, "--full", str(path)],
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        logger.warning("Metadata unavailable for %s: %s", path, exc)
        return MediaInfo()

    if result.returncode != 0:
        logger.warning(
            "Metadata unavailable for %s: %s exited with %s",
            path,
            executable,
            result.returncode,
        )
        return MediaInfo()

    info = parse_mediainfo(result.stdout)
    if info.duration_s is None:
        logger.warning("No duration reported for %s", path)

    return info
