"""
Strip indenting whitespace from comment text
"""

import re


_LEADING_BLANK_LINES = re.compile(r"\A\n+")
_TRAILING_BLANK_LINES = re.compile(r"\n+\Z")
_LEDE = re.compile(r"\A(\s+)")


class CommentNormalizer:
    """
    Normalize comment text written as an indented multi-line literal.

    Two rules are applied:

    1. Empty lines (lines with *no* characters, not even whitespace) are
       removed from the beginning and end of the text.

    2. Whatever whitespace precedes the first line of text (the lede) is
       removed from the beginning of every line that starts with it.

    This lets comments be written as triple-quoted strings indented to
    match the surrounding code::

        service.set_comment(target, '''
            Customers who have placed at least one order.

            Rows are never deleted, only deactivated.
            ''')

    Start the text on the line after the opening quotes and put the closing
    quotes at the same indent as the text; a closing line indented less
    than the text is not blank and is kept as it is. When the first
    line has no leading whitespace the lede is empty and the indentation
    of later lines is kept as written::

        '''Only this line is flush.
            These lines keep their indent.
        '''

    Only the first line's indentation is used; lines indented less than it
    are left as they are.
    """

    def normalize(self, raw: str) -> str:
        text = _LEADING_BLANK_LINES.sub("", raw)
        text = _TRAILING_BLANK_LINES.sub("", text)

        match = _LEDE.match(text)
        lede = match.group(1) if match else ""
        if lede:
            text = re.sub(f"^{re.escape(lede)}", "", text, flags=re.MULTILINE)
            # a last line holding only the lede leaves a trailing newline
            text = _TRAILING_BLANK_LINES.sub("", text)

        return text


_default_normalizer = CommentNormalizer()


def normalize_comment(raw: str) -> str:
    """Normalize ``raw`` with the default CommentNormalizer"""
    return _default_normalizer.normalize(raw)
