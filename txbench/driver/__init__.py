from .driver import DriverState, TestRunDriver, invocation_label

__all__ = ["DriverState", "TestRunDriver", "invocation_label"]
