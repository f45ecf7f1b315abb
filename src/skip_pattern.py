"""
Skip pattern parsing

A skip pattern is a comma separated list of pages and inclusive ranges,
e.g. "1, 2, 10-12". Tokens that do not parse are ignored one by one.
"""

import re
from typing import Optional, Set

import config

_SINGLE = re.compile(r'^\d+$')
_RANGE = re.compile(r'^(\d+)\s*-\s*(\d+)$')


def _page_number(digits: str, limit: int) -> int:
    """Integer value of a digit run; anything past limit becomes limit + 1"""
    digits = digits.lstrip('0') or '0'
    if len(digits) > len(str(limit)):
        return limit + 1
    return min(int(digits), limit + 1)


def parse_skip_pattern(pattern: str, max_page: Optional[int] = None) -> Set[int]:
    """
    Parse a skip pattern into the set of page numbers it names

    Args:
        pattern (str): Raw user text such as "1,2,10-12"
        max_page (int): Last page that can exist, usually the document's page
            count. Ranges are cut off there so "1-9999999999" stays cheap.
            Defaults to config.MAX_SKIP_PAGE.

    Returns:
        set: Page numbers to exclude. A reversed range ("12-10") adds nothing.
    """
    skip_pages = set()
    if not pattern or not pattern.strip():
        return skip_pages

    limit = config.MAX_SKIP_PAGE if max_page is None else max(0, max_page)

    for token in pattern.split(','):
        token = token.strip()
        if _SINGLE.match(token):
            page = _page_number(token, limit)
            if page <= limit:
                skip_pages.add(page)
            continue

        match = _RANGE.match(token)
        if match:
            start = _page_number(match.group(1), limit)
            end = min(_page_number(match.group(2), limit), limit)
            skip_pages.update(range(start, end + 1))

    return skip_pages
