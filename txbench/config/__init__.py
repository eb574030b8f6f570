from .loader import load_suite
from .types import BenchOptions, ConfigError, SuiteConfig, TestConfig

__all__ = ["load_suite", "SuiteConfig", "TestConfig", "BenchOptions", "ConfigError"]
