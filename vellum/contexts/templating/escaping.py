"""
LaTeX Text Escaping

Converts arbitrary user text into text that is safe to splice into LaTeX source.

Escaping is one-directional: the output is safe for the compiler, not a
faithful encoding of the input.
"""

import re
from typing import Any, List, Tuple

# Applied in order. Backslash must come first so the escape sequences inserted by
# later steps are not escaped a second time.
LATEX_REPLACEMENTS: List[Tuple[str, str]] = [
    ("\\", r"\textbackslash{}"),
    ("{", r"\{"),
    ("}", r"\}"),
    ("$", r"\$"),
    ("&", r"\&"),
    ("%", r"\%"),
    ("#", r"\#"),
    ("^", r"\textasciicircum{}"),
    ("_", r"\_"),
    ("~", r"\textasciitilde{}"),
]

# Typographic normalization, applied after the LaTeX special characters
TYPOGRAPHIC_REPLACEMENTS: List[Tuple[str, str]] = [
    ('"', "''"),
    ("–", "--"),  # en dash
    ("—", "--"),  # em dash
    ("…", "..."),  # ellipsis
]

# Letters, digits, whitespace and a fixed punctuation set survive; anything else
# becomes a space. "_" is matched by \w, so it is listed explicitly.
DISALLOWED_CHARACTER = re.compile(r"[^\w\s,.\-:;!?()]|_")


def escape_latex(text: Any) -> str:
    """
    Escape text for inclusion in LaTeX source.

    Args:
        text: Value to escape. None yields ""; non-strings are converted with str().

    Returns:
        Escaped, trimmed text

    Example:
        >>> escape_latex('100% & "quote" — end…')
        '100        quote   -- end...'
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)

    for char, replacement in LATEX_REPLACEMENTS:
        text = text.replace(char, replacement)

    for char, replacement in TYPOGRAPHIC_REPLACEMENTS:
        text = text.replace(char, replacement)

    text = DISALLOWED_CHARACTER.sub(" ", text)

    return text.strip()
