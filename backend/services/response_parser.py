import logging
import re
from typing import List

from backend.models.schemas import SimplificationResult

logger = logging.getLogger(__name__)

SECTION_MARKERS = re.compile(r"(?:SUMMARY:|PROS:|CONS:)", re.IGNORECASE)
BOLD_HEADING = re.compile(r"^\*\*\w+\*\*$", re.ASCII)
LEADING_ORDINAL = re.compile(r"^\d+\.\s*")
LEADING_BULLET = re.compile(r"^[-•*]\s*")
BOLD = re.compile(r"\*\*(.*?)\*\*")

MAX_ITEMS = 3

SUMMARY_PLACEHOLDER = "Summary not available"
PROS_PLACEHOLDER = "Analysis of benefits not available"
CONS_PLACEHOLDER = "Analysis of drawbacks not available"


def clean_markdown(text: str) -> str:
    """Turn ``**bold**`` into ``<strong>bold</strong>``; the only markup we emit."""
    return BOLD.sub(r"<strong>\1</strong>", text)


def extract_list_items(section: str) -> List[str]:
    items = []
    for line in section.split("\n"):
        line = line.strip()
        if not line or BOLD_HEADING.match(line):
            continue
        line = LEADING_ORDINAL.sub("", line, count=1)
        line = LEADING_BULLET.sub("", line, count=1)
        items.append(clean_markdown(line))
    return items


def fallback_result() -> SimplificationResult:
    return SimplificationResult(
        summary="Error processing the policy analysis",
        pros=["Unable to analyze benefits"],
        cons=["Unable to analyze drawbacks"],
    )


def parse_ai_response(text: str) -> SimplificationResult:
    """
    Split a model reply laid out as SUMMARY / PROS / CONS into a result.

    Fragment 0 (anything before the first marker) is ignored. Lists are capped at
    three items and never padded; an empty list gets a single placeholder.
    Never raises: on any error the fixed fallback result is returned instead.
    """
    try:
        sections = SECTION_MARKERS.split(text)

        summary = sections[1].strip() if len(sections) >= 2 else ""
        pros = extract_list_items(sections[2])[:MAX_ITEMS] if len(sections) >= 3 else []
        cons = extract_list_items(sections[3])[:MAX_ITEMS] if len(sections) >= 4 else []

        return SimplificationResult(
            summary=clean_markdown(summary or SUMMARY_PLACEHOLDER),
            pros=pros or [PROS_PLACEHOLDER],
            cons=cons or [CONS_PLACEHOLDER],
        )
    except Exception:
        logger.exception("Error parsing AI response")
        return fallback_result()
