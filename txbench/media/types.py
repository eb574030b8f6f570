from dataclasses import dataclass


@dataclass(frozen=True)
class MediaInfo:
    duration_s: int | None = None
    interlaced: bool = False
    needs_scaling: bool = False
