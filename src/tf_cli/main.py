"""tf CLI entry point."""

import sys

import click

from tf_cli.commands import tf

cli = tf


def main() -> None:
    """Console script entry point.

    Same as cli() except that usage errors exit 1 instead of click's 2.
    """
    try:
        rv = cli.main(prog_name="tf", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(130)
    sys.exit(rv if isinstance(rv, int) else 0)


if __name__ == "__main__":
    main()
