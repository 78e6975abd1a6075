"""
Unicode Utilities Module for the Report Layout Engine

Provides the text normalization applied to every string before it is
measured, wrapped or written to a page:

- Unicode normalization (NFC) for consistent character counts
- Zero-width and invisible character removal
- Folding of typographic punctuation (curly quotes, long dashes) to ASCII

Width estimation counts characters, so normalization has to happen before
measurement; otherwise an estimate and the rendered run would disagree.

Usage:
    from unicode_utilities import clean_text, fold_typography

    clean_text("It\u2019s \u201cdone\u201d")  # 'It\'s "done"'
"""

import logging
import re
import unicodedata
from typing import Optional

# Get logger for this module
logger = logging.getLogger(__name__)

# Pattern to match invisible/zero-width characters
# Excludes normal whitespace (space, tab, newline, etc.)
_INVISIBLE_PATTERN = re.compile(
    r'[\u200b-\u200f\u2060-\u206f\ufeff\u00ad\u034f\u061c\u180e]'
)

# Typographic punctuation and its plain ASCII replacement.
# Every replacement is ASCII, so folding twice changes nothing.
TYPOGRAPHY_REPLACEMENTS = {
    '\u201c': '"',   # left double quotation mark
    '\u201d': '"',   # right double quotation mark
    '\u201e': '"',   # double low-9 quotation mark
    '\u2018': "'",   # left single quotation mark
    '\u2019': "'",   # right single quotation mark
    '\u201a': "'",   # single low-9 quotation mark
    '\u2013': '-',   # en dash
    '\u2014': '-',   # em dash
    '\u2015': '-',   # horizontal bar
    '\u2028': '\n',  # line separator
    '\u2029': '\n',  # paragraph separator
}

_TYPOGRAPHY_TABLE = str.maketrans(TYPOGRAPHY_REPLACEMENTS)


def normalize_unicode(text: Optional[str], form: str = "NFC") -> str:
    """
    Normalize unicode text to a consistent form.

    Ensures that characters like "e" with an acute accent are represented consistently whether
    they arrive as a single precomposed character or as a combining sequence,
    which keeps character counts (and therefore width estimates) stable.

    Args:
        text: The text to normalize. If None or not a string, returns empty string.
        form: Unicode normalization form ("NFC", "NFD", "NFKC" or "NFKD").

    Returns:
        Normalized unicode string, or empty string if input is None/invalid.

    Example:
        >>> normalize_unicode("cafe\\u0301")
        'caf\xe9'
        >>> normalize_unicode(None)
        ''
    """
    if text is None:
        return ""

    if not isinstance(text, str):
        try:
            text = str(text)
        except (ValueError, TypeError):
            logger.warning(f"Could not convert value to string for unicode normalization: {type(text)}")
            return ""

    try:
        return unicodedata.normalize(form, text)
    except (ValueError, TypeError) as e:
        logger.warning(f"Unicode normalization failed for text: {e}")
        return text


def remove_invisible_chars(text: Optional[str]) -> str:
    """
    Remove invisible and zero-width characters from text.

    Such characters would be counted by the width estimator while rendering
    as nothing. Normal whitespace (spaces, newlines) is preserved.

    Example:
        >>> remove_invisible_chars("hello\\u200bworld")
        'helloworld'
    """
    if text is None:
        return ""

    if not isinstance(text, str):
        return str(text) if text else ""

    return _INVISIBLE_PATTERN.sub('', text)


def fold_typography(text: Optional[str]) -> str:
    """
    Fold curly quotes and long dashes to their ASCII equivalents.

    Example:
        >>> fold_typography("\\u201cHi\\u201d \\u2013 it\\u2019s me")
        '"Hi" - it\\'s me'
    """
    if text is None:
        return ""

    if not isinstance(text, str):
        text = str(text)

    return text.translate(_TYPOGRAPHY_TABLE)


def clean_text(text: Optional[str]) -> str:
    """
    Prepare text for measurement and rendering.

    Applies NFC normalization, strips invisible characters and folds
    typographic punctuation. The result is stable under repeated
    application.

    Args:
        text: The text to prepare. If None, returns empty string.

    Returns:
        Text ready to be measured, wrapped and written to a page.
    """
    if text is None:
        return ""

    text = normalize_unicode(text, form="NFC")
    text = remove_invisible_chars(text)
    return fold_typography(text)
