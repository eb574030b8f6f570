from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping

from txbench.config.types import TestConfig

from .types import MediaInfo

INPUT_FILE = "INPUT_FILE"
OUTPUT_FILE = "OUTPUT_FILE"
INTERLACED_OPTION = "INTERLACED_OPTION"
SCALING_OPTION = "SCALING_OPTION"


def resolve(template: str, substitutions: Mapping[str, str]) -> str:
    """Replace every placeholder key found in ``template`` with its value.

    Single pass: replaced text is never scanned again, and when two keys
    overlap the longer one wins. Anything without a substitution is left
    as written.
    """
    keys = [key for key in substitutions if key]
    if not keys:
        return template

    keys.sort(key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern.sub(lambda m: substitutions[m.group(0)], template)


def build_command(
    test: TestConfig, media: MediaInfo, src_file: str | Path, dest_file: str | Path
) -> str:
    scaling_option = test.scaling_option if media.needs_scaling else ""
    interlaced_option = test.interlaced_option if media.interlaced else ""

    params = {
        INPUT_FILE: str(src_file),
        OUTPUT_FILE: str(dest_file),
        INTERLACED_OPTION: interlaced_option,
        SCALING_OPTION: scaling_option,
    }
    return resolve(test.command, params)
