"""
Cursor-context tokenizing for completion requests.
"""

import re

_IDENTIFIER_CHAR = re.compile(r'[A-Za-z0-9_$]')
_SKIPPABLE = {' ', '\t', '\n', '\r'}


def get_chain(text: str, offset: int) -> str:
    """
    Read the dotted identifier chain ending just before `offset`.

    Whitespace between chain parts is skipped, so ``foo .\n bar`` reads as
    ``foo.bar``. A trailing dot yields an empty last part (``foo.``).
    """
    index = offset - 1
    parts = []
    current = ''
    last_was_dot = False

    while index >= 0:
        char = text[index]
        if _IDENTIFIER_CHAR.match(char):
            current = char + current
            last_was_dot = False
        elif char == '.':
            parts.insert(0, current)
            current = ''
            last_was_dot = True
        elif char not in _SKIPPABLE:
            break
        index -= 1

    if current or last_was_dot:
        parts.insert(0, current)

    return '.'.join(parts)
