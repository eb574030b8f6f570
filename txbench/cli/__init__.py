from .commands import run_cli


def main() -> None:
    raise SystemExit(run_cli())


__all__ = ["run_cli", "main"]
