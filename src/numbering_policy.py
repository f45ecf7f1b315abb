"""
Numbering policy - which pages show a number and which number they show

Pages are 1-indexed. The start-page/range rule and the skip pattern are two
independent filters; ``is_page_numbered`` combines them for callers that
need both.
"""

from dataclasses import dataclass
from typing import AbstractSet, List, Optional

from numbering_settings import NumberingSettings
from skip_pattern import parse_skip_pattern

REASON_BEFORE_START = "before-start"
REASON_OUTSIDE_RANGE = "outside-range"
REASON_SKIPPED = "skipped"


@dataclass(frozen=True)
class PagePlan:
    """Numbering decision for one page"""
    page_index: int
    numbered: bool
    display_number: int
    reason: Optional[str] = None


def should_show_number(page_index: int, settings: NumberingSettings, total_pages: int) -> bool:
    """Start-page and custom-range rule. Does not look at the skip pattern."""
    if page_index < settings.visible_from_page:
        return False

    if settings.custom_range:
        if page_index < settings.range_from or page_index > settings.range_to:
            return False

    return True


def get_display_number(page_index: int, settings: NumberingSettings) -> int:
    """Display value: start_number + (page_index - visible_from_page)"""
    return settings.start_number + (page_index - settings.visible_from_page)


def is_page_numbered(page_index: int, settings: NumberingSettings,
                     skip_pages: AbstractSet[int], total_pages: int) -> bool:
    """Policy pass AND not skip-listed"""
    return (should_show_number(page_index, settings, total_pages)
            and page_index not in skip_pages)


def _exclusion_reason(page_index, settings, skip_pages, total_pages):
    if page_index < settings.visible_from_page:
        return REASON_BEFORE_START
    if not should_show_number(page_index, settings, total_pages):
        return REASON_OUTSIDE_RANGE
    if page_index in skip_pages:
        return REASON_SKIPPED
    return None


def build_page_plan(settings: NumberingSettings, total_pages: int) -> List[PagePlan]:
    """Numbering decision for every page of a document, in page order"""
    skip_pages = parse_skip_pattern(settings.skip_pattern, total_pages)
    plan = []
    for page_index in range(1, total_pages + 1):
        reason = _exclusion_reason(page_index, settings, skip_pages, total_pages)
        plan.append(PagePlan(
            page_index=page_index,
            numbered=reason is None,
            display_number=get_display_number(page_index, settings),
            reason=reason,
        ))
    return plan
