"""Plain-text formatters for result cards, the detail view and the dashboard."""

from __future__ import annotations

import textwrap
from typing import Sequence

from ..matcher.orchestrator import HIGH_POTENTIAL_THRESHOLD, count_high_potential
from ..models import AggregatedResult, EligibilityStatus


STATUS_EMOJI = {
    EligibilityStatus.ELIGIBLE: "✅",
    EligibilityStatus.INELIGIBLE: "❌",
    EligibilityStatus.CONDITIONAL: "⚠️",
}

BAND_EMOJI = {
    "high": "🟢",
    "medium": "🟡",
    "low": "🔴",
}

MEDIUM_POTENTIAL_THRESHOLD = 40
CARD_WIDTH = 72

EMPTY_DASHBOARD = (
    "No grants found matching your exact criteria. Try adjusting your project description."
)


def score_band(score: int) -> str:
    """'high' above 70, 'medium' above 40, otherwise 'low'."""
    if score > HIGH_POTENTIAL_THRESHOLD:
        return "high"
    if score > MEDIUM_POTENTIAL_THRESHOLD:
        return "medium"
    return "low"


def _money(amount: float) -> str:
    return f"${amount:,.0f}"


def _rule(char: str = "-") -> str:
    return char * CARD_WIDTH


def _wrap(text: str, indent: str = "  ", first: str | None = None) -> str:
    return textwrap.fill(
        " ".join(text.split()),
        width=CARD_WIDTH,
        initial_indent=indent if first is None else first,
        subsequent_indent=indent,
    )


def _bullets(items: Sequence[str], marker: str = "-") -> list[str]:
    first = f"  {marker} "
    return [_wrap(item, indent=" " * len(first), first=first) for item in items]


def status_badge(result: AggregatedResult) -> str:
    status = result.analysis.eligibility_status
    return f"{STATUS_EMOJI[status]} {status.value}"


# ---------------------------------------------------------------------------
# Card
# ---------------------------------------------------------------------------

def format_card(result: AggregatedResult, index: int | None = None) -> str:
    """Summary card: agency, name, score, badges and a reasoning snippet."""
    grant, analysis = result.grant, result.analysis
    prefix = f"[{index}] " if index is not None else ""
    band = BAND_EMOJI[score_band(analysis.match_score)]

    reasoning = textwrap.shorten(
        " ".join(analysis.suitability_reasoning.split()),
        width=CARD_WIDTH * 2,
        placeholder="...",
    )

    lines = [
        f"{prefix}{band} {grant.name}",
        f"    {grant.agency.upper()}",
        f"    Match Score: {analysis.match_score}%",
        f"    {status_badge(result)}  |  {grant.funding_type.value}  |  Up to {_money(grant.max_funding)}",
        _wrap(reasoning, indent="    "),
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Detail view
# ---------------------------------------------------------------------------

def format_detail(result: AggregatedResult) -> str:
    """Expanded view of one result."""
    grant, analysis = result.grant, result.analysis

    lines = [
        _rule("="),
        grant.name,
        grant.agency,
        _rule("="),
        f"Eligibility Confidence: {analysis.match_score}% {BAND_EMOJI[score_band(analysis.match_score)]}",
        f"Status: {status_badge(result)}",
        "",
        "Funding Details",
        f"  Max Amount: {_money(grant.max_funding)}",
        f"  Type: {grant.funding_type.value}",
        "",
        "AI Assessment",
        _wrap(analysis.suitability_reasoning),
    ]

    if analysis.hard_disqualifiers:
        lines += ["", "Critical Issues Found"]
        lines += _bullets(analysis.hard_disqualifiers)

    lines += ["", "Criteria Citation", _wrap(f'"{analysis.citation}"')]

    # Checklist only makes sense for plausible matches
    if analysis.match_score > MEDIUM_POTENTIAL_THRESHOLD:
        lines += ["", "Application Kit Checklist"]
        lines += _bullets(analysis.required_documents, marker="[ ]")

    lines.append(_rule("="))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def format_dashboard(results: Sequence[AggregatedResult], business_name: str = "") -> str:
    """Ranked list of cards with a high-potential count header."""
    header = [
        _rule("="),
        "Funding Opportunities",
    ]
    if business_name:
        header.append(f"Analyzing for: {business_name}")
    header += [
        f"{count_high_potential(results)} High Potential Matches",
        _rule("="),
    ]

    if not results:
        return "\n".join(header + [EMPTY_DASHBOARD])

    cards = [format_card(result, index=i) for i, result in enumerate(results, start=1)]
    return "\n".join(header) + "\n" + f"\n{_rule()}\n".join(cards)
