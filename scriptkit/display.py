"""
Display helpers for fitting text into a terminal.

Functions
- squeeze(k, text): fit text in k >= 5 columns by eliding its middle with "...".
- squeezepath(path, columns): keep the base name of a path readable and squeeze its parent.
- length(text): printable length of text, ignoring ANSI escape sequences.
- box(text, columns): a square rich Panel around text, folded to the terminal width.
- showfilecontents(path): print a boxed (squeezed) path followed by the file's lines.
- comment(text) / bullet(text): wrap text as "# " comment lines or as a " - " bullet.

Widths default to the COLUMNS environment variable, or 80 when it is not set.
"""
import os
import os.path
import re
import textwrap

from rich.box import SQUARE
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console()

# CSI sequences (colors, cursor movement) and the shift-in control character.
_escapes = re.compile(r"\x1B\[[0-9;]*[a-zA-Z]|\x0F")


def terminal_width():
    """
    Return the COLUMNS environment variable as an integer, 80 when unset or empty.
    """
    try:
        return int(os.environ.get("COLUMNS") or 80)
    except ValueError:
        raise ValueError("COLUMNS must be an integer, got %r" % os.environ["COLUMNS"]) from None


def squeeze(k, text, /):
    """
    Fit text within k columns.

    Text that already fits is returned unchanged. Otherwise the middle is replaced
    by "..." keeping (k - 3) // 2 characters from each end.

    Raises
    - ValueError: when k < 5.
    """
    if k < 5:
        raise ValueError("unsupported length %d" % k)
    if len(text) <= k:
        return text
    keep = (k - 3) // 2
    return text[:keep] + "..." + text[len(text) - keep:]


def squeezepath(path, /, columns=Unset):
    """
    Fit a path within the given number of columns.

    The base name is kept whole when it fits and the parent directory is squeezed
    into the remaining room. A base name too wide for the terminal is squeezed
    too (never below 5 columns), and the parent shrinks to 7 columns.
    """
    width = coalesce(columns) or terminal_width()
    base = os.path.basename(path)
    parent = os.path.dirname(path) or "."
    # Keep at least 5 columns for the parent; otherwise squeeze both parts.
    if len(base) > width - 6:
        return squeeze(7, parent) + "/" + squeeze(max(5, width - 8), base)
    return squeeze(width - 1 - len(base), parent) + "/" + base


def length(text, /):
    """
    Return the length of text minus non-printing characters.
    """
    return len(_escapes.sub("", str(text)))


def box(text, /, columns=Unset):
    """
    Surround text with a square box no wider than the given columns.

    Returns a rich renderable; print it with any Console.
    """
    width = coalesce(columns) or terminal_width()
    body = text if isinstance(text, Text) else Text(str(text))
    return Panel(body, box=SQUARE, expand=False, padding=(0, 1), width=width)


def showfilecontents(path, /):
    """
    Print the given file in a fetching way: its boxed path, then every line.

    Raises
    - FileNotFoundError: when path is not a regular file.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError("file not found: %s" % path)
    console.print(box(squeezepath(path)))
    with open(path, encoding="utf-8", errors="replace") as file:
        for line in file:
            console.print(Text("🮌 " + line.rstrip("\n")))
    console.print()


def comment(text, /, width=78):
    """
    Format a multiline string as "# " comment lines wrapped at width.
    """
    lines = []
    for paragraph in str(text).split("\n"):
        lines.extend(textwrap.wrap(paragraph, width, break_on_hyphens=False) or [""])
    return "\n".join(("# " + line).rstrip() for line in lines)


def bullet(text, /, width=74):
    """
    Format a multiline string as a single bullet point of a list.
    """
    lines = []
    for paragraph in str(text).split("\n"):
        lines.extend(textwrap.wrap(paragraph, width, break_on_hyphens=False) or [""])
    return "\n".join((" - " if index == 0 else "   ") + line for index, line in enumerate(lines))


__all__ = (
    "terminal_width",
    "squeeze",
    "squeezepath",
    "length",
    "box",
    "showfilecontents",
    "comment",
    "bullet",
)
