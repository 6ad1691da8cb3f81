# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from configurator.app import apply_plan, build_configurator
from configurator.config import ConfigurationError, configure_logging
from configurator.domain import ActionError, ConfiguratorError, ReportOutcome
from configurator.plan import PlanError, load_plan
from configurator.ui.report import render_report

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from configurator.app import ConfiguratorFactory

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_MANUAL_INTERVENTION = 3

_OUTCOME_EXIT_CODES = {
    ReportOutcome.APPLIED: EXIT_OK,
    ReportOutcome.REVERTED: EXIT_FAILED,
    ReportOutcome.REVERTED_WITH_ERRORS: EXIT_MANUAL_INTERVENTION,
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply configuration changes as one batch")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply = subparsers.add_parser("apply", help="Apply a JSON plan of configuration changes")
    apply.add_argument("plan", type=Path, help="Path to the plan document")
    apply.add_argument(
        "--audit-message",
        type=str,
        help="Audit message recorded when every change is applied (overrides the plan)",
    )

    show = subparsers.add_parser("show", help="Show current state without changing anything")
    show.add_argument(
        "kind",
        choices=("component", "feature", "properties", "config", "services"),
        help="Kind of resource to query",
    )
    show.add_argument(
        "target",
        type=str,
        help="Component/feature name, property file path, pid, or factory pid",
    )

    return parser.parse_args(list(argv))


def _show(kind: str, target: str, factory: ConfiguratorFactory) -> object:
    configurator = factory()
    if kind == "component":
        return {"name": target, "started": configurator.is_component_started(target)}
    if kind == "feature":
        return {"name": target, "installed": configurator.is_feature_started(target)}
    if kind == "properties":
        return configurator.get_properties(Path(target))
    if kind == "config":
        return configurator.get_config(target)
    if kind == "services":
        return configurator.get_managed_service_configs(target)
    raise ValueError(f"Unsupported resource kind: {kind}")


def main(
    argv: Sequence[str] | None = None,
    *,
    configurator_factory: ConfiguratorFactory | None = None,
) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    factory = configurator_factory or build_configurator

    try:
        if parsed_args.command == "apply":
            plan = load_plan(parsed_args.plan)
            result = apply_plan(
                plan,
                configurator_factory=factory,
                audit_message=parsed_args.audit_message,
            )
            print(render_report(result.report, result.labels))
            exit_code = _OUTCOME_EXIT_CODES[result.report.outcome]
            if exit_code != EXIT_OK:
                sys.exit(exit_code)
        else:
            value = _show(parsed_args.kind, parsed_args.target, factory)
            print(json.dumps(value, indent=2, sort_keys=True, default=str))
    except (PlanError, ConfigurationError):
        log.exception("Invalid input")
        sys.exit(EXIT_USAGE)
    except (ActionError, ConfiguratorError):
        log.exception("Configuration request failed")
        sys.exit(EXIT_FAILED)
    except Exception:
        log.exception("Fatal error")
        sys.exit(EXIT_FAILED)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
