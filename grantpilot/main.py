"""Terminal front end for GrantPilot.

Usage:
    grantpilot                 interactive wizard, then the results dashboard
    grantpilot --example 0     skip the prompts using a canned example profile
    grantpilot --example 0 --json
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Callable, List, Optional

from .app import AppState, GrantPilotSession
from .config import load_config
from .exceptions import WizardError
from .models import Industry, Province
from .presentation import format_dashboard, format_detail
from .wizard import EXAMPLE_PROFILES, ProfileWizard, WizardStep

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_MISSING_CREDENTIAL = 2
EXIT_ANALYSIS_FAILED = 3

LANDING_TEXT = """GrantPilot Canada
Stop guessing. Start funding.
Answer 4 simple questions and we check your eligibility against government
funding programs, citing the official criteria and listing the documents you need."""

# (field, label) per step; enum fields get a numbered menu
STEP_FIELDS = {
    WizardStep.BASICS: [
        ("company_name", "Legal Company Name"),
        ("industry", "Industry Sector"),
        ("is_incorporated", "Business is federally or provincially incorporated (y/n)"),
    ],
    WizardStep.LOCATION: [
        ("province", "Province / Territory"),
    ],
    WizardStep.FINANCIALS: [
        ("years_in_business", "Years in Business"),
        ("employee_count", "Full-time Employees"),
        ("annual_revenue", "Annual Revenue (Last Fiscal Year)"),
    ],
    WizardStep.PROJECT: [
        ("project_description", "Describe your project (more than 20 characters)"),
        ("project_budget", "Estimated Project Budget"),
    ],
}

ENUM_FIELDS = {"industry": Industry, "province": Province}


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _parse_value(field: str, raw: str):
    """Turn a typed answer into a draft value; '' keeps the current value."""
    if field in ENUM_FIELDS:
        options = list(ENUM_FIELDS[field])
        if raw.isdigit() and 1 <= int(raw) <= len(options):
            return options[int(raw) - 1]
        return raw
    if field == "is_incorporated":
        return raw.lower() in ("y", "yes", "true", "1")
    if field in ("years_in_business", "employee_count"):
        return int(raw)
    if field in ("annual_revenue", "project_budget"):
        return float(raw.replace(",", "").replace("$", ""))
    return raw


def _prompt_step(wizard: ProfileWizard, ask: Callable[[str], str], say: Callable[[str], None]) -> None:
    for field, label in STEP_FIELDS[wizard.step]:
        current = getattr(wizard.draft, field)
        if field in ENUM_FIELDS:
            for i, option in enumerate(ENUM_FIELDS[field], start=1):
                say(f"  {i}. {option.value}")
        shown = current.value if hasattr(current, "value") else current
        while True:
            raw = ask(f"{label} [{'' if shown is None else shown}]: ").strip()
            if not raw:
                break
            try:
                wizard.update(**{field: _parse_value(field, raw)})
                break
            except (ValueError, WizardError) as exc:
                say(f"  Invalid value: {exc}")


def run_wizard(wizard: ProfileWizard, ask: Callable[[str], str], say: Callable[[str], None]):
    """Drive the wizard from prompts until it completes. Returns the profile, or None on quit."""
    examples = ", ".join(f"{i}={ex.label}" for i, ex in enumerate(EXAMPLE_PROFILES))
    say(f"Test data: type 'e <n>' to load an example ({examples})")

    while True:
        step = wizard.step
        say(f"\nStep {step.number} of {len(WizardStep)}: {step.title}")
        _prompt_step(wizard, ask, say)

        while True:
            if not wizard.can_advance:
                for reason in wizard.missing_requirements():
                    say(f"  ! {reason}")
            choice = ask("[n]ext, [b]ack, [e <n>] example, [r]e-enter, [q]uit: ").strip().lower()
            if choice in ("q", "quit"):
                return None
            if choice in ("b", "back"):
                wizard.back()
                break
            if choice in ("r", ""):
                break
            if choice.startswith("e"):
                try:
                    index = int(choice[1:].strip() or 0)
                    wizard.load_example(index)
                except (ValueError, WizardError) as exc:
                    say(f"  {exc}")
                else:
                    say(f"Loaded '{EXAMPLE_PROFILES[index].label}'. Review from step 1.")
                break
            if choice in ("n", "next"):
                if not wizard.can_advance:
                    continue
                try:
                    profile = wizard.next()
                except WizardError as exc:
                    say(f"  {exc}")
                    break
                if profile is not None:
                    return profile
                break


def browse_dashboard(session: GrantPilotSession, ask: Callable[[str], str], say: Callable[[str], None]) -> bool:
    """Show results; returns True when the user asked to start over."""
    while session.state is AppState.DASHBOARD:
        say(format_dashboard(session.results, session.business_name))
        choice = ask("Result number for details, [s]tart over, [q]uit: ").strip().lower()
        if choice in ("q", "quit", ""):
            return False
        if choice in ("s", "start over"):
            session.start_over()
            return True
        if choice.isdigit() and 1 <= int(choice) <= len(session.results):
            say(format_detail(session.select(int(choice) - 1)))
            ask("Press Enter to close ")
            session.close_detail()
    return False


def _results_json(session: GrantPilotSession) -> str:
    return json.dumps(
        [result.model_dump(mode="json") for result in session.results],
        indent=2,
    )


async def run(
    argv: Optional[List[str]] = None,
    ask: Callable[[str], str] = input,
    say: Callable[[str], None] = print,
    session: Optional[GrantPilotSession] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.json and args.example is None:
        parser.error("--json requires --example")

    if session is None:
        try:
            config = load_config()
        except ValueError as exc:
            say(str(exc))
            return EXIT_CONFIG
        configure_logging(args.log_level or config.log_level)
        session = GrantPilotSession(config)

    if not args.json:
        say(LANDING_TEXT)
    if not session.start():
        say(session.notice)
        return EXIT_MISSING_CREDENTIAL

    while True:
        if args.example is not None:
            session.wizard.load_example(args.example)
            # walk every step so each predicate is checked exactly as in the prompts
            profile = None
            while profile is None:
                profile = session.wizard.next()
        else:
            profile = run_wizard(session.wizard, ask, say)
            if profile is None:
                return EXIT_OK

        if not args.json:
            say(f"\nAnalyzing {len(session.catalog)} programs for {profile.company_name}...")
        if not await session.complete_wizard(profile):
            say(session.notice or "Analysis did not complete.")
            return EXIT_ANALYSIS_FAILED

        if args.json:
            say(_results_json(session))
            return EXIT_OK
        if args.example is not None:
            say(format_dashboard(session.results, session.business_name))
            return EXIT_OK
        if not browse_dashboard(session, ask, say):
            return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GrantPilot: check a business against Canadian funding programs")
    parser.add_argument(
        "--example",
        type=int,
        choices=range(len(EXAMPLE_PROFILES)),
        help="Use a canned example profile instead of the interactive wizard.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print ranked results as JSON (requires --example).",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (e.g. DEBUG).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    sys.exit(asyncio.run(run(argv)))


if __name__ == "__main__":  # pragma: no cover
    main()
