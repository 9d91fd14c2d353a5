"""
Help text extraction and printing.

A script documents itself with its leading comment block (shell style) or its
module docstring (Python). getdoc() extracts that text and docstring() prints it
on stderr under a boxed heading with the script's base name:

    ┌───────────┐
    │ backup.sh │
    └───────────┘
     Copy the given directory to the backup server.

Comment blocks follow these rules: the first line (usually the shebang) is
skipped, every following line is taken up to the first blank line, and leading
whitespace plus one "#" is stripped from each of them.
"""
import ast
import os.path

from rich.console import Console
from rich.text import Text

from .display import box
from .reporting import warn
from .stack import scoped

console = Console(stderr=True)


def _comments(source):
    lines = []
    for number, line in enumerate(source.splitlines(), start=1):
        if not line.strip():
            break
        if number > 1:
            stripped = line.lstrip()
            lines.append(stripped[1:] if stripped.startswith("#") else line)
    return "\n".join(lines)


def _is_python(path, source):
    if path.endswith((".py", ".pyw")):
        return True
    first = source.split("\n", 1)[0]
    return first.startswith("#!") and "python" in first


def getdoc(path, /):
    """
    Return the documentation block of the script at path.

    Python sources use their module docstring when they have one; every other
    source (and Python without a docstring) uses the leading comment block.

    Raises
    - OSError: when the file cannot be read.
    """
    with open(path, encoding="utf-8", errors="replace") as file:
        source = file.read()

    if _is_python(path, source):
        try:
            if (doc := ast.get_docstring(ast.parse(source))) is not None:
                return doc
        except SyntaxError:
            pass  # not valid Python after all: fall back to the comment block

    return _comments(source)


def docstring(path, /):
    """
    Print the documentation block of the script at path on stderr.

    The heading box is always 80 columns wide at most, whatever COLUMNS says.
    """
    with scoped("COLUMNS", "80"):
        console.print(box(os.path.basename(path)))

    try:
        doc = getdoc(path)
    except OSError as exception:
        warn("no documentation available for %s (%s)" % (path, exception.strerror or exception))
        return

    console.print(Text(doc))
    console.print()


__all__ = (
    "getdoc",
    "docstring",
)
