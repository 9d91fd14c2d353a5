"""
Leveled reporting on stderr: messages, warnings, and errors.

Every line starts with a timestamp. What gets printed depends on the verbosity:

    0 --- suppress warnings and messages
    1 --- suppress messages
    2 --- suppress nothing
    3 --- also print the call stack with errors [default]

The verbosity is read on every call, in this order: a ``__verbosity__`` attribute
on ``__main__``, the ``VERBOSITY`` environment variable, then the default (3).
Scripts usually set it right after importing::

    __verbosity__ = 1

    from scriptkit.reporting import err, warn, msg
"""
import datetime
import inspect
import os
import os.path

from rich.console import Console
from rich.text import Text

from .colors import bd, b, color, r, y

console = Console(stderr=True)

DEFAULT_VERBOSITY = 3


def timestamp():
    """
    Return the current local time as "[YYYY-mm-dd-@-HH:MM:SS+zzzz]".
    """
    return datetime.datetime.now().astimezone().strftime("[%Y-%m-%d-@-%H:%M:%S%z]")


def verbosity():
    """
    Resolve the active verbosity level (see the module documentation).

    Raises
    - ValueError: when the configured level is not an integer.
    """
    level = getattr(__import__("__main__"), "__verbosity__", None)
    if level is None:
        level = os.environ.get("VERBOSITY", DEFAULT_VERBOSITY)
    try:
        return int(level)
    except (TypeError, ValueError):
        raise ValueError("verbosity must be an integer, got %r" % (level,)) from None


def callstack(*, skip=0):
    """
    Render the current call stack, outermost frame first.

    Each frame becomes one line: "⮡ file.py:function:lineno". skip drops the
    innermost frames (callstack itself is always dropped).
    """
    frames = inspect.stack(0)[1 + skip:]
    lines = []
    for frame in reversed(frames):
        lines.append(Text.assemble(
            "  ",
            r("⮡"),
            " ",
            bd(os.path.basename(frame.filename)),
            ":",
            b(frame.function),
            ":",
            y(str(frame.lineno)),
        ))
    return Text("\n").join(lines)


def _message(*message):
    return Text(" ").join(part if isinstance(part, Text) else Text(str(part)) for part in message)


def err(*message):
    """
    Report an error. Always shown; the call stack is added at verbosity 3 and above.
    """
    if verbosity() > 2:
        console.print(r(timestamp()))
        # Skip err() itself so the innermost line is the reporting caller.
        console.print(callstack(skip=1))
        console.print(Text.assemble(r(bd("Error:")), " ", _message(*message)))
    else:
        console.print(Text.assemble(r(timestamp()), " ", r(bd("Error:")), " ", _message(*message)))


def warn(*message):
    """
    Print a warning unless the verbosity is 0.
    """
    if verbosity() > 0:
        console.print(Text.assemble(y(timestamp(), bd("Warning:")), " ", _message(*message)))


def msg(*message):
    """
    Print a message when the verbosity is 2 or more.
    """
    if verbosity() > 1:
        console.print(Text.assemble(color(28, timestamp()), " ", _message(*message)))


def notimplemented():
    """
    Report that the calling function is not yet implemented.
    """
    err("%s is not yet implemented!" % inspect.stack()[1].function)


__all__ = (
    "timestamp",
    "verbosity",
    "callstack",
    "err",
    "warn",
    "msg",
    "notimplemented",
)
