"""Entry point for `python -m i3_reorder`."""

import sys

from i3_reorder.cli.commands import cli_main


def main() -> int:
    """Main entry point."""
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
