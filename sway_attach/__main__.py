"""Entry point for the sway-attach CLI."""

import sys

from sway_attach.cli.commands import cli_main


def main() -> int:
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
