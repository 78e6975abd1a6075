"""
Paragraph Wrapper

Greedy word wrap of normalized text into lines that do not exceed a
character budget. Whole words fill each line up to the budget; a word longer
than the budget is placed on a line of its own without being broken.
Hard line breaks in the source text are kept.

Callers normalize text (see ``unicode_utilities.clean_text``) before
wrapping so that the budget and the rendered glyphs agree.
"""

import textwrap
from typing import List


def _make_wrapper(max_chars: int) -> textwrap.TextWrapper:
    return textwrap.TextWrapper(
        width=max(1, int(max_chars)),
        break_long_words=False,
        break_on_hyphens=False,
        expand_tabs=True,
        tabsize=4,
    )


def wrap_text(text: str, max_chars: int) -> List[str]:
    """Wrap ``text`` into lines of at most ``max_chars`` characters.

    Args:
        text: Normalized text to wrap
        max_chars: Character budget per line (values below 1 count as 1)

    Returns:
        Ordered list of lines; blank input yields a single empty line
    """
    wrapper = _make_wrapper(max_chars)
    lines: List[str] = []
    for paragraph in (text or "").split("\n"):
        wrapped = wrapper.wrap(paragraph)
        lines.extend(wrapped if wrapped else [""])
    return lines


def wrap_body(text: str, max_chars: int) -> List[str]:
    """Wrap card and list bodies; whitespace-only text becomes one empty line."""
    if not (text or "").strip():
        return [""]
    return wrap_text(text, max_chars)
