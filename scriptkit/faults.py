"""
Scriptkit faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue raised while
  matching an invocation against a declaration.
- UsageError: base type for invocation mistakes. Carries a message plus options
  (input, index, usage, prog, ...) and knows how to render itself.
- HelpRequested: not an error; the distinguished outcome of "-h"/"--help".
- DeclarationError: the declaration string itself is malformed (programming error).
- EmptyOptionValueWarning: non-fatal, "--name=" with nothing after the "=".
- trigger(): central entry point to surface any fault (respecting shell/colorful).

Integration
- parse_args() raises faults; it never prints and never exits.
- Entry points call trigger(fault, shell=True, ...) to print on stderr and exit 1.
  With shell=False, trigger() re-raises errors and emits warnings via warnings.warn.
"""
import copy
import os.path
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .helptext import docstring
from .reporting import err, warn
from .utils import Unset, ordinal


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - help (11100)
      • HELP_REQUESTED
    - switches (options/flags) (1111x)
      • UNRECOGNIZED_OPTION, UNRECOGNIZED_FLAG, FLAG_ASSIGNMENT, MISSING_OPTION_VALUE
    - positionals (1112x)
      • UNEXPECTED_POSITIONAL, MISSING_POSITIONAL
    - declarations (1113x)
      • MALFORMED_DECLARATION
    - warnings (12xxx)
      • EMPTY_OPTION_VALUE
    """
    # --- help (11xxx) ---
    HELP_REQUESTED          = 11100

    # --- switch errors (11xxx) ---
    UNRECOGNIZED_OPTION     = 11111
    UNRECOGNIZED_FLAG       = 11112
    FLAG_ASSIGNMENT         = 11113
    MISSING_OPTION_VALUE    = 11114

    # --- positional errors (11xxx) ---
    UNEXPECTED_POSITIONAL   = 11121
    MISSING_POSITIONAL      = 11122

    # --- declaration errors (11xxx) ---
    MALFORMED_DECLARATION   = 11131

    # --- warnings (12xxx) ---
    EMPTY_OPTION_VALUE      = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _styles():
    return defaultdict(str, {
        "error-message": "",
        "usage-label": "color(1)",  # red, like the error label
        "program-name": "bold",
        "usage-section": "",
        "arrow": "color(1)",
        "detail-label": "",
        "token": "bold color(3)",  # yellow
    } | getattr(__import__("__main__"), "__styles__", {}))


class UsageError(Exception):
    """
    Base type for mistakes in an invocation.

    Options commonly carried
    - input: the offending name or token as typed.
    - index: 1-based position of the offending argument.
    - usage: the declaration as written (rebuilt usage line).
    - prog: program name shown in the usage line.
    - shell/colorful: runtime flags consumed by __trigger__/__rich__.
    """
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def detail(self):
        """
        return the (label, value) shown under the usage line, or None.
        """
        return None

    def __rich__(self):
        styles = _styles()
        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if isinstance(fragment, Text):
                return fragment if colorful else Text(fragment.plain)
            return Text(str(fragment), styles[style] if colorful else "")

        lines = [text(self.message, "error-message")]

        if (usage := self.options.get("usage", Unset)) is not Unset:
            prog = self.options.get("prog") or getattr(__import__("__main__"), "__prog__", None) or _prog()
            lines.append(Text.assemble(
                text("Usage", "usage-label"),
                ": ",
                text(prog, "program-name"),
                " ",
                text(usage, "usage-section"),
            ))
            if detail := self.detail():
                label, value = detail
                lines.append(Text.assemble(
                    text("-->", "arrow"), " ", text(label, "detail-label"), ": ", text(value, "token")
                ))

        return Text("\n").join(lines)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        err(self.__rich__())
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnrecognizedOptionError(UsageError):
    code = FaultCode.UNRECOGNIZED_OPTION


class UnrecognizedFlagError(UsageError):
    code = FaultCode.UNRECOGNIZED_FLAG


class FlagAssignmentError(UsageError):
    code = FaultCode.FLAG_ASSIGNMENT


class MissingOptionValueError(UsageError):
    code = FaultCode.MISSING_OPTION_VALUE


class UnexpectedPositionalError(UsageError):
    code = FaultCode.UNEXPECTED_POSITIONAL

    def detail(self):
        return "Error token", self.options["input"]


class MissingPositionalError(UsageError):
    code = FaultCode.MISSING_POSITIONAL

    def detail(self):
        return "Unset variable", self.options["input"]


class HelpRequested(Exception):
    """
    "-h" or "--help" appeared in the invocation.

    Raised by parse_args() before any other classification. The top-level entry
    point decides what to do with it; in shell mode __trigger__ prints the
    docstring of options["source"] and exits with status 1.
    """
    code = FaultCode.HELP_REQUESTED

    def __init__(self, message="help requested", /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        docstring(self.options.get("source") or _source())
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DeclarationError(ValueError):
    """
    The declaration string cannot be turned into a declaration table.

    Options commonly carried
    - token: the offending token as written.
    - index: 1-based position of the token within the declaration.
    """
    code = FaultCode.MALFORMED_DECLARATION

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)


class EmptyOptionValueWarning(UserWarning):
    code = FaultCode.EMPTY_OPTION_VALUE

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=4)
        warn(self.message)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


def _source():
    return getattr(__import__("__main__"), "__file__", None) or sys.argv[0]


def _prog():
    return os.path.basename(_source())


def position(index, /):
    """
    return "at <ordinal> position" for messages, or "" when the index is unknown.
    """
    return " at %s position" % ordinal(index) if index else ""


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode errors are printed on stderr and the process exits with 1;
      otherwise they are raised.

    typical options
    - shell, colorful, prog, source.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "UsageError",
    "UnrecognizedOptionError",
    "UnrecognizedFlagError",
    "FlagAssignmentError",
    "MissingOptionValueError",
    "UnexpectedPositionalError",
    "MissingPositionalError",
    "HelpRequested",
    "DeclarationError",
    "EmptyOptionValueWarning",
    "position",
    "trigger",
)
