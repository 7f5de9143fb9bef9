"""The tf command - resolve settings and dispatch an action."""

import os
from pathlib import Path

import click

from tf_cli import __version__
from tf_cli.commands.common import echo_step, handle_result, settings_options
from tf_cli.lib import paths
from tf_cli.lib.settings import Flags, read_persisted, resolve_settings
from tf_cli.workflows import plan_for, run_action

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    # Everything after ACTION belongs to terraform
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}


@click.command(context_settings=CONTEXT_SETTINGS)
@settings_options
@click.version_option(version=__version__, prog_name="tf")
@click.argument("action", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def tf(
    ctx: click.Context,
    configuration: str | None,
    environment: str | None,
    lib_url: str | None,
    revision: str | None,
    debug: bool,
    action: str | None,
    args: tuple[str, ...],
) -> None:
    """Run terraform against a configuration of the shared library.

    Options are resolved flag first, then TF_* environment variables, then
    the .tf.env file written by bootstrap.

    \b
    Actions:
      bootstrap   Copy the configuration's templates here and write .tf.env
      clean       Delete the .tf scratch workspace
      init        Fetch the library, generate the backend, terraform init
      plan|apply  init, then run the terraform command
      show|destroy|import|state|output|...
                  terraform init if needed, then run the terraform command

    \b
    Examples:
      tf -c base -e client1 bootstrap
      tf plan
      tf -r v1.2.0 apply -auto-approve
      tf state list
    """
    if action is None or action.startswith("-"):
        click.echo(ctx.get_help(), err=True)
        if action is not None:
            click.secho(f"Error: No such option: {action}", fg="red", err=True)
        ctx.exit(1)

    plan = plan_for(action)
    root = Path.cwd()

    flags = Flags(
        configuration=configuration,
        environment=environment,
        lib_url=lib_url,
        git_revision=revision,
        debug=True if debug else None,
    )
    persisted = handle_result(read_persisted(paths.settings_file(root)))
    settings = handle_result(
        resolve_settings(flags, os.environ, persisted, require=plan.requires_settings)
    )

    handle_result(run_action(settings, root, action, args, report=echo_step))
