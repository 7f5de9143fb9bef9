"""Action dispatch - map a CLI verb to an ordered list of steps.

Every verb is looked up in ACTIONS; verbs not listed are passed through to
terraform. Steps are evaluated in order and the first error stops the run.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from tf_cli.lib.errors import BootstrapError, CommandError, InitError, WorkspaceError
from tf_cli.lib.result import Err, Ok, Result
from tf_cli.models import Settings
from tf_cli.operations.zones import ZoneDirectory
from tf_cli.workflows.bootstrap import bootstrap
from tf_cli.workflows.clean import clean
from tf_cli.workflows.init import Reporter, init, is_initialized, make_runner, quiet

type ActionError = BootstrapError | InitError | CommandError | WorkspaceError


class Step(StrEnum):
    """A unit of work in an action plan."""

    BOOTSTRAP = "bootstrap"
    CLEAN = "clean"
    INIT = "init"
    ENSURE_INIT = "ensure-init"
    DELEGATE = "delegate"


@dataclass(frozen=True)
class ActionPlan:
    """Steps for a verb.

    args_step is the step that receives the extra CLI arguments.
    """

    steps: tuple[Step, ...]
    requires_settings: bool = True
    args_step: Step = Step.DELEGATE


PASSTHROUGH = ActionPlan((Step.ENSURE_INIT, Step.DELEGATE))

ACTIONS: dict[str, ActionPlan] = {
    "bootstrap": ActionPlan((Step.BOOTSTRAP,)),
    "clean": ActionPlan((Step.CLEAN,), requires_settings=False),
    "init": ActionPlan((Step.INIT,), args_step=Step.INIT),
    "plan": ActionPlan((Step.INIT, Step.DELEGATE)),
    "apply": ActionPlan((Step.INIT, Step.DELEGATE)),
    "show": PASSTHROUGH,
    "destroy": PASSTHROUGH,
    "import": PASSTHROUGH,
    "state": PASSTHROUGH,
    "output": PASSTHROUGH,
}


def plan_for(verb: str) -> ActionPlan:
    """Plan for verb; unknown verbs get the passthrough plan."""
    return ACTIONS.get(verb, PASSTHROUGH)


def run_action(
    settings: Settings,
    root: Path,
    verb: str,
    args: Sequence[str] = (),
    zones: ZoneDirectory | None = None,
    report: Reporter = quiet,
) -> Result[None, ActionError]:
    """Run every step of verb's plan in order."""
    plan = plan_for(verb)
    zones = zones or ZoneDirectory(settings.zones_url)

    for step in plan.steps:
        step_args = tuple(args) if step == plan.args_step else ()

        match step:
            case Step.BOOTSTRAP:
                match bootstrap(settings, root):
                    case Err() as e:
                        return e
                    case Ok(result):
                        for path in result.copied:
                            report(f"Created {path.name}")
                        for path in result.skipped:
                            report(f"Kept existing {path.name}")
                        if result.settings_written:
                            report(f"Wrote {result.settings_file.name}")
                        else:
                            report(f"Kept existing {result.settings_file.name}")

            case Step.CLEAN:
                match clean(root):
                    case Err() as e:
                        return e
                    case Ok(removed):
                        report("Removed scratch workspace" if removed else "Nothing to clean")

            case Step.INIT:
                match init(settings, root, zones, step_args, report=report):
                    case Err() as e:
                        return e
                    case Ok(_):
                        pass

            case Step.ENSURE_INIT:
                if is_initialized(settings, root):
                    continue
                match init(settings, root, zones, step_args, report=report):
                    case Err() as e:
                        return e
                    case Ok(_):
                        pass

            case Step.DELEGATE:
                match make_runner(settings, root).run(verb, step_args):
                    case Err() as e:
                        return e
                    case Ok(_):
                        pass

    return Ok(None)
