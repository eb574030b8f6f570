import tempfile
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class TestConfig:
    __test__ = False  # not a pytest class

    name: str
    command: str
    processes: list[int]
    ext: str = ""
    interlaced_option: str = ""
    scaling_option: str = ""


@dataclass
class SuiteConfig:
    tests: list[TestConfig]

    def __iter__(self):
        # File order is significant
        yield from self.tests

    def __len__(self):
        return len(self.tests)

    def test_names(self) -> list[str]:
        return [test.name for test in self.tests]


@dataclass(frozen=True)
class BenchOptions:
    keep_outputs: bool = False
    log_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
