from .command import build_command, resolve
from .files import clean_output_dir, cleanup_filename, find_sources, replicate
from .inspector import inspect_media, parse_mediainfo
from .types import MediaInfo

__all__ = [
    "build_command",
    "resolve",
    "clean_output_dir",
    "cleanup_filename",
    "find_sources",
    "replicate",
    "inspect_media",
    "parse_mediainfo",
    "MediaInfo",
]
