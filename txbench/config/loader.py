import json
import tomllib
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from .types import ConfigError, SuiteConfig, TestConfig, UnsupportedConfigFormatError


def load_suite(path: str | Path) -> SuiteConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Tests file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Tests path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    suite = _build_suite_config(pure_path, raw_file)
    return suite


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Any:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc


def _parse_toml(path: Path) -> Any:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc


def _parse_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc


def _build_suite_config(path: Path, raw: Any) -> SuiteConfig:
    # A bare list of tests is accepted as well as a {"tests": [...]} mapping
    if isinstance(raw, Mapping):
        if not "tests" in raw:
            raise ConfigError(f"{path}: missing 'tests' field")
        raw_tests = raw["tests"]
    elif isinstance(raw, list):
        raw_tests = raw
    else:
        raise ConfigError(
            f"{path}: top-level value must be a list or an object, got {type(raw)}"
        )

    if not isinstance(raw_tests, list):
        raise ConfigError(f"'tests' must be a list, got {type(raw_tests)}")

    if len(raw_tests) < 1:
        raise ConfigError(f"There must be at least one test in the tests file")

    tests = []
    seen = set()
    for index, fields in enumerate(raw_tests):
        if not isinstance(fields, Mapping):
            raise ConfigError(f"Test #{index + 1} must be a mapping")

        test = _build_test_config(index, fields)

        if test.name in seen:
            raise ConfigError(f"Duplicate test name: {test.name}")

        seen.add(test.name)
        tests.append(test)

    return SuiteConfig(tests=tests)


def _build_test_config(index: int, fields: Mapping[str, Any]) -> TestConfig:
    keys = {"name", "command", "processes", "ext", "interlaced_option", "scaling_option"}
    where = f"Test #{index + 1}"

    if not "name" in fields:
        raise ConfigError(f"{where}: missing 'name'")

    if not isinstance(fields["name"], str) or len(fields["name"].strip()) < 1:
        raise ConfigError(f"{where}: The name should be a non empty string")

    name = fields["name"].strip()

    for field in fields.keys():
        if field not in keys:
            raise ConfigError(f"{name}: Can't process: {field}")

    if not "command" in fields:
        raise ConfigError(f"{name}: missing 'command'")

    if not isinstance(fields["command"], str):
        raise ConfigError(f"{name}: The command should be a string")

    if len(fields["command"].strip()) < 1:
        raise ConfigError(f"{name}: Command missing")

    command = fields["command"].strip()

    if not "processes" in fields:
        raise ConfigError(f"{name}: missing 'processes'")

    processes = _build_processes(name, fields["processes"])

    options = {}
    for key in ("ext", "interlaced_option", "scaling_option"):
        value = fields.get(key)
        if value is None:
            options[key] = ""
            continue

        if not isinstance(value, str):
            raise ConfigError(f"{name}: {key} should be a string")

        options[key] = value

    return TestConfig(name, command, processes, **options)


def _build_processes(name: str, raw: Any) -> list[int]:
    # Order and duplicates are kept: each entry is one benchmark pass
    if isinstance(raw, int) and not isinstance(raw, bool):
        raw = [raw]

    if not isinstance(raw, Sequence) or isinstance(raw, str):
        raise ConfigError(f"{name}: Processes should be an integer or a list.")

    if len(raw) < 1:
        raise ConfigError(f"{name}: Processes list is empty")

    processes = []
    for item in raw:
        if not isinstance(item, int) or isinstance(item, bool):
            raise ConfigError(f"{name}: {item!r} should be an integer in processes")

        if item < 1:
            raise ConfigError(f"{name}: Process count must be at least 1, got {item}")

        processes.append(item)

    return processes
