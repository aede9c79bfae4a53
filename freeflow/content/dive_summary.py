"""Completion report for a finished dive.

Renders a DiveSummary as plain text through a Jinja2 template. The same
text is printed by the headless simulator and shown on the completion
screen.

Usage:
    from freeflow.content.dive_summary import render_dive_summary

    text = render_dive_summary(session.summary())
    print(text)
"""

from pathlib import Path
from typing import Optional

import jinja2

from freeflow.core.logging import get_logger
from freeflow.engine.models import DiveOutcome, DiveSummary

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
SUMMARY_TEMPLATE = "dive_summary.txt.j2"

OUTCOME_TEXT: dict[DiveOutcome, str] = {
    DiveOutcome.COMPLETED: "Full dive completed",
    DiveOutcome.BOTTOM_REACHED: "Reached the bottom",
    DiveOutcome.BUDGET_EXHAUSTED: "Surfaced after using every check",
    DiveOutcome.ABANDONED: "Surfaced early",
}

# Jinja2 environment (created once, reused)
_env: Optional[jinja2.Environment] = None


def _get_env() -> jinja2.Environment:
    """Get or create the Jinja2 environment."""
    global _env
    if _env is None:
        _env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )
    return _env


def render_dive_summary(summary: DiveSummary) -> str:
    """Render the completion report.

    Args:
        summary: Final numbers from DiveSession.summary()

    Returns:
        Plain-text report

    Raises:
        jinja2.TemplateNotFound: If the template file is missing
    """
    template = _get_env().get_template(SUMMARY_TEMPLATE)
    rendered: str = template.render(
        summary=summary,
        tier=summary.tier,
        outcome_text=OUTCOME_TEXT.get(summary.outcome, summary.outcome.value),
    )
    logger.debug(
        "Rendered dive summary",
        extra={"context": {"variant": summary.variant, "tier": summary.tier.name}},
    )
    return rendered.rstrip() + "\n"
