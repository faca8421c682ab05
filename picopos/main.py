"""Entry point for the Pico POS Textual app."""

from __future__ import annotations

import argparse

from picopos.config import configure_logging
from picopos.pos_app import PosApp


def main(argv: list[str] | None = None) -> None:
    """Run the Textual application."""
    parser = argparse.ArgumentParser(prog="picopos", description="Terminal point-of-sale for a small cafe.")
    parser.add_argument("--email", help="sign in directly instead of showing the login prompt")
    parser.add_argument("--log-file", help="debug log destination")
    args = parser.parse_args(argv)

    configure_logging(path=args.log_file)
    PosApp(email=args.email).run()


if __name__ == "__main__":
    main()
