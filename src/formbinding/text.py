"""Plain-text extraction from HTML fragments."""

import html
import re

_BLOCK_END_PATTERN = re.compile(r'</article>|<br\s*/?>|</div>|</p>', re.IGNORECASE)
_TAG_PATTERN = re.compile(r'<[^>]*>')
_SPACES_PATTERN = re.compile(r' {2,}')


def remove_tags(text: str, new_line: str = ' ') -> str:
    """Strip tags from an HTML fragment and decode its entities.

    Closing block tags and line breaks become new_line so that words of
    adjacent paragraphs do not run together; runs of spaces collapse to one.

    Args:
        text: HTML fragment, may be None or empty
        new_line: Replacement for block ends and <br> tags

    Returns:
        The plain text
    """
    if not text:
        return ''
    plain = _BLOCK_END_PATTERN.sub(new_line, text)
    plain = _TAG_PATTERN.sub('', plain)
    plain = html.unescape(plain)
    plain = _SPACES_PATTERN.sub(' ', plain)
    return plain.strip()
