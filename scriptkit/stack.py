"""
Save/restore stack for temporarily overriding variables.

`using(name, value)` remembers the current value of a variable and assigns a new
one; `gnisu()` ("using" backwards) pops the most recent entry and puts the old
value back. Entries are restored in LIFO order, so nested overrides unwind
correctly as long as every push is matched by a pop. The `scoped()` context
manager does the pairing for you:

    with scoped("COLUMNS", "80"):
        print(box("heading"))

The module-level functions operate on a default stack over os.environ. The stack
is shared process state and is not thread-safe.
"""
import os
from collections.abc import MutableMapping
from contextlib import contextmanager

from .reporting import msg
from .utils import Unset

# Field separator used when showing entries; forbidden inside saved values.
SEPARATOR = "\x01"


class UsingStack:
    """
    LIFO stack of (name, old value) pairs over a mutable mapping.

    A variable that did not exist when it was pushed is removed again when popped,
    instead of being restored as an empty string.
    """

    def __init__(self, variables=Unset, /):
        if variables is Unset:
            variables = os.environ
        if not isinstance(variables, MutableMapping):
            raise TypeError("UsingStack() argument must be a mutable mapping")
        self._variables = variables
        self._entries = []

    @property
    def variables(self):
        return self._variables

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))

    def using(self, name, value, /):
        """
        Save the current value of name on the stack, then assign value to it.

        Raises
        - TypeError: when name is not a string.
        - ValueError: when the current value contains the \\x01 separator.
        """
        if not isinstance(name, str):
            raise TypeError("using() first argument must be a string")
        old = self._variables.get(name, Unset)
        if isinstance(old, str) and SEPARATOR in old:
            raise ValueError("no \\001 allowed in value when assigning variable %s" % name)
        # Only a successful assignment gets an entry, so pushes and pops stay paired.
        self._variables[name] = value
        self._entries.append((name, old))

    def gnisu(self):
        """
        Pop the most recent entry and restore that variable.

        Returns the restored name, or None when the stack is empty.
        """
        if not self._entries:
            return None
        name, old = self._entries.pop()
        if old is Unset:
            self._variables.pop(name, None)
        else:
            self._variables[name] = old
        return name

    @contextmanager
    def scoped(self, name, value, /):
        """
        Override name for the duration of a with-block; restored on every exit path.
        """
        self.using(name, value)
        try:
            yield self._variables[name]
        finally:
            self.gnisu()

    def show(self):
        """
        Report the stack contents as a message (see scriptkit.reporting.msg).
        """
        msg("Custom variable stack:", " ".join(
            "%s:%s" % (name, "" if old is Unset else old) for name, old in self._entries
        ))


_stack = UsingStack()


def using(name, value, /):
    _stack.using(name, value)


def gnisu():
    return _stack.gnisu()


def scoped(name, value, /):
    return _stack.scoped(name, value)


def showusingstack():
    _stack.show()


__all__ = (
    "UsingStack",
    "using",
    "gnisu",
    "scoped",
    "showusingstack",
)
