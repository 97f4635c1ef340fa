"""netheal console CLI."""

from netheal.cli.commands import app


def main() -> None:
    app()


__all__ = ["app", "main"]
