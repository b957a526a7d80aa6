"""Application entry point for bytescore.

Allows running the CLI with ``python -m bytescore``.
"""

from __future__ import annotations

from bytescore.app.cli import cli


def main() -> None:
    """Main entry point for the bytescore command."""
    cli()


if __name__ == "__main__":
    main()
