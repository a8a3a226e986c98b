"""Blank-line canonicalization of ledger text."""

from squirrel.domain.grammar import INDENT, is_blank, looks_like_header


def normalize_blank_lines(contents: str) -> str:
    """Ensure exactly one blank line separates consecutive entries.

    A blank line is inserted before a header that directly follows a
    posting-like line, and trailing empty lines are dropped. Applying the
    function twice gives the same result as applying it once.

    Args:
        contents: Ledger text

    Returns:
        Normalized ledger text
    """
    out: list[str] = []
    prev_nonblank_was_posting = False

    for line in contents.split("\n"):
        blank = is_blank(line)

        if looks_like_header(line) and prev_nonblank_was_posting:
            if out and not is_blank(out[-1]):
                out.append("")

        out.append(line)

        if blank:
            prev_nonblank_was_posting = False
        else:
            prev_nonblank_was_posting = line.startswith(INDENT)

    while len(out) > 1 and is_blank(out[-1]):
        out.pop()

    return "\n".join(out)
