"""Workflows layer - orchestrate operations into user intents."""

from tf_cli.workflows.bootstrap import bootstrap
from tf_cli.workflows.clean import clean
from tf_cli.workflows.dispatch import ACTIONS, ActionPlan, Step, plan_for, run_action
from tf_cli.workflows.init import init, is_initialized

__all__ = [
    "bootstrap",
    "clean",
    "init",
    "is_initialized",
    "ACTIONS",
    "ActionPlan",
    "Step",
    "plan_for",
    "run_action",
]
