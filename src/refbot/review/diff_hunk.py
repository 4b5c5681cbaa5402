"""Line positions inside unified-diff hunks.

Review comments on a pull request are anchored to the last line of the diff
hunk they belong to. These helpers turn the hunk text into the absolute line
number that line has in the post-change file.

A hunk looks like::

    @@ -50,7 +50,8 @@
     unchanged line
    -removed line
    +added line
"""

HUNK_MARKER = "@@"


class InvalidDiffHunkError(ValueError):
    """Raised when text passed as a diff hunk has no @@ header marker."""


def diff_hunk_start_position(header_line: str) -> int:
    """Parse the new-file start line from a hunk header.

    The start is the number after the first '+' up to the next ','
    (``@@ -50,7 +50,8 @@`` -> 50). A header without a parseable number
    yields 0.
    """
    _, plus, after_plus = header_line.partition("+")
    if not plus:
        return 0
    start_segment = after_plus.split(",", 1)[0]
    if not start_segment.isdecimal():
        return 0
    return int(start_segment)


def last_line_number(diff_hunk: str) -> int:
    """Absolute post-change line number of the last line in a diff hunk.

    Added ('+') and unchanged (' ') lines exist in the new file and advance
    the count; removed ('-') lines do not.

    Args:
        diff_hunk: Hunk text, header line first

    Returns:
        The new-file line number of the hunk's final line

    Raises:
        InvalidDiffHunkError: If the text contains no @@ marker
    """
    if HUNK_MARKER not in diff_hunk:
        raise InvalidDiffHunkError(f"Diff hunk has to start with {HUNK_MARKER}")

    lines = diff_hunk.splitlines()
    start = diff_hunk_start_position(lines[0])

    # The header itself is not a file line, so count from the line before start
    line_number = start - 1 if start != 0 else 0
    for line in lines:
        if line.startswith(("+", " ")):
            line_number += 1

    return line_number
