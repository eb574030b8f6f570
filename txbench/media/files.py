import logging
import re
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^0-9A-Za-z.\-]")


def cleanup_filename(name: str) -> str:
    """Basename of ``name`` with anything outside ``[0-9A-Za-z.-]`` turned into ``_``."""
    base = re.sub(r"^.*[\\/]", "", name)
    return _UNSAFE.sub("_", base)


def find_sources(root: str | Path, pattern: str = "*.mov") -> list[Path]:
    root = Path(root)
    return sorted(path for path in root.rglob(pattern) if path.is_file())


def replicate(src: str | Path, dest_dir: str | Path, count: int) -> list[Path]:
    """Make ``count`` copies of ``src`` named ``<stem>_<i><suffix>`` in ``dest_dir``.

    Existing copies are reused, so a rerun doesn't pay for the copy again.
    """
    src = Path(src)
    dest_dir = Path(dest_dir)
    if count > 0:
        logger.debug("Making %d copies of '%s'", count, src)

    copies = []
    for i in range(1, count + 1):
        dest = dest_dir / f"{src.stem}_{i}{src.suffix}"
        if dest.exists():
            logger.debug("Skipping copying '%s' as '%s' exists", src, dest)
        else:
            logger.debug("Copying '%s' to '%s'", src, dest)
            shutil.copyfile(src, dest)
        copies.append(dest)

    return copies


def clean_output_dir(path: str | Path) -> int:
    path = Path(path)
    logger.debug("Cleaning output folder '%s'", path)
    removed = 0
    for entry in path.iterdir():
        if entry.is_dir():
            continue
        entry.unlink()
        removed += 1
    return removed
