"""
Text processing utilities shared by the templating and rendering contexts.
"""

import re
from typing import Optional, Tuple


def extract_balanced_delimiters(
    text: str,
    start_pos: int,
    open_char: str = '{',
    close_char: str = '}',
    escape_char: str = '\\'
) -> Tuple[str, int]:
    """
    Extract content between balanced delimiters, handling escaped characters.

    Assumes start_pos is just AFTER an opening delimiter. Counts nested delimiters
    to find the matching closing delimiter, skipping escaped characters.

    Args:
        text: Text containing delimited content
        start_pos: Position just after the opening delimiter
        open_char: Opening delimiter character (default: '{')
        close_char: Closing delimiter character (default: '}')
        escape_char: Character used for escaping (default: '\\')

    Returns:
        (content, end_pos) where:
        - content: Text between the delimiters (excluding delimiters themselves)
        - end_pos: Position after the closing delimiter

    Raises:
        ValueError: If delimiters are unmatched

    Example:
        >>> text = "foo {bar {nested} baz} qux"
        >>> content, end = extract_balanced_delimiters(text, 5)
        >>> content
        'bar {nested} baz'
    """
    depth = 1  # Start at 1 (already inside opening delimiter)
    pos = start_pos

    while pos < len(text) and depth > 0:
        if text[pos] == escape_char:
            # Skip escaped character
            pos += 2
            continue
        elif text[pos] == open_char:
            depth += 1
        elif text[pos] == close_char:
            depth -= 1
        pos += 1

    if depth != 0:
        raise ValueError(
            f"Unmatched {open_char}{close_char} delimiters starting at position {start_pos}"
        )

    content = text[start_pos:pos - 1]
    return content, pos


def find_command_invocation(
    text: str, command: str, num_args: int
) -> Optional[Tuple[int, int]]:
    """
    Locate the first invocation of a LaTeX command taking exactly num_args brace arguments.

    Matches structurally: the command name must be followed (optionally after
    whitespace) by num_args balanced {...} groups. Definitions such as
    \\newcommand{\\cmd}[5]{...} are skipped because the command name is directly
    followed by '}' rather than an argument.

    Args:
        text: LaTeX source to search
        command: Command name without backslash (e.g., 'NameEmailPhoneSiteGithub')
        num_args: Number of mandatory brace arguments

    Returns:
        (start, end) span of the full invocation, or None if not found

    Example:
        >>> find_command_invocation(r"x \\Pair{a}{b{c}} y", "Pair", 2)
        (2, 16)
    """
    pattern = re.compile(r"\\" + re.escape(command) + r"(?![A-Za-z])")

    for match in pattern.finditer(text):
        pos = match.end()
        found_all = True

        for _ in range(num_args):
            while pos < len(text) and text[pos] in " \t\n":
                pos += 1
            if pos >= len(text) or text[pos] != "{":
                found_all = False
                break
            try:
                _, pos = extract_balanced_delimiters(text, pos + 1)
            except ValueError:
                found_all = False
                break

        if found_all:
            return match.start(), pos

    return None


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    if max_consecutive == 0:
        pattern = r'\n[ \t]*\n([ \t]*\n)*'
    else:
        pattern = r'\n[ \t]*\n([ \t]*\n)+'

    replacement = '\n' * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)


def capitalize_first(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]
