r"""
Declaration strings: tokenizing and building the declaration table.

A declaration is a whitespace-separated list of tokens:

    name                 required positional argument (order matters)
    [--name]             optional flag, False unless given
    [--name=PLACEHOLDER] optional keyword option, takes a value

The brackets are a readability hint for "optional" and carry no meaning once
stripped. Hyphens in names become underscores in binding targets, so
"[--dry-run]" binds "dry_run".

    >>> table = declare("infile [--outfile=<path>] [--force]", environ={})
    >>> table.positionals
    (Positional(name='infile', spelling='infile'),)
    >>> dict(table.defaults)
    {'outfile': None, 'force': False}

Keyword option defaults come from a same-named, non-empty environment variable
(after normalization), so callers can pre-seed them; otherwise they are None.

Validation
- Keyword options must match r"--[A-Za-z_][\w-]*=[^=]+" (one "=", non-empty placeholder).
- Flags must match r"--[^=\s]+".
- Any other token starting with "-" is rejected instead of being taken as a positional.
- Binding targets must be unique across the whole declaration.
"""
import os
import re
from types import MappingProxyType
from typing import NamedTuple

from .faults import DeclarationError
from .utils import Unset, coalesce, normalize, ordinal

_keyword = re.compile(r"--(?P<name>[A-Za-z_][A-Za-z0-9_-]*)=(?P<placeholder>[^=]+)")
_flag = re.compile(r"--(?P<name>[^=\s]+)")


class Positional(NamedTuple):
    """
    required positional argument; filled in declaration order.
    """
    name: str
    spelling: str


class KeywordOption(NamedTuple):
    """
    optional "--name=value" argument; the placeholder only documents the value.
    """
    name: str
    spelling: str
    placeholder: str


class FlagOption(NamedTuple):
    """
    optional presence-only "--name" argument.
    """
    name: str
    spelling: str


def split(spec, /):
    """
    Split a declaration on runs of whitespace; quoting is not supported.
    """
    if not isinstance(spec, str):
        raise TypeError("declaration must be a string")
    return spec.split()


def tokenize(spec, /):
    """
    Return the declaration's tokens with one leading "[" and one trailing "]" removed.
    """
    tokens = []
    for token in split(spec):
        token = token.removeprefix("[").removesuffix("]")
        tokens.append(token)
    return tokens


def classify(token, /, *, index=None):
    """
    Turn one bracket-stripped token into a Positional, KeywordOption, or FlagOption.

    Raises
    - DeclarationError: when the token starts with "-" but is neither a keyword
      option nor a flag (e.g. "--name=" or "-x").
    """
    if match := _keyword.fullmatch(token):
        spelling = match["name"]
        return KeywordOption(normalize(spelling), spelling, match["placeholder"])

    if match := _flag.fullmatch(token):
        spelling = match["name"]
        return FlagOption(normalize(spelling), spelling)

    if token.startswith("-"):
        where = " at %s position" % ordinal(index) if index else ""
        raise DeclarationError(
            "malformed option declaration %r%s (expected --name or --name=PLACEHOLDER)" % (token, where),
            token=token,
            index=index,
        )

    if not token:
        raise DeclarationError("empty argument declaration", token=token, index=index)

    return Positional(normalize(token), token)


class Declaration:
    """
    The declaration table built from one declaration string.

    Properties
    - spec: the declaration string as given.
    - tokens: raw tokens as written (brackets kept), used for the usage line.
    - positionals: tuple[Positional, ...] in declaration order.
    - options: read-only mapping binding target -> KeywordOption | FlagOption.
    - defaults: read-only mapping binding target -> resolved default
      (False for flags; the environment value or None for keyword options).
    """

    def __init__(self, spec, /, environ=Unset):
        environ = coalesce(environ, os.environ)

        positionals = []
        options = {}
        defaults = {}
        seen = set()

        for index, token in enumerate(tokenize(spec), start=1):
            argument = classify(token, index=index)

            if argument.name in seen:
                raise DeclarationError(
                    "duplicated argument %r at %s position" % (argument.spelling, ordinal(index)),
                    token=token,
                    index=index,
                )
            seen.add(argument.name)

            match argument:
                case Positional():
                    positionals.append(argument)
                case FlagOption():
                    options[argument.name] = argument
                    defaults[argument.name] = False
                case KeywordOption():
                    options[argument.name] = argument
                    # An empty environment value counts as unset.
                    defaults[argument.name] = environ.get(argument.name) or None

        self._spec = spec
        self._tokens = tuple(split(spec))
        self._positionals = tuple(positionals)
        self._options = MappingProxyType(options)
        self._defaults = MappingProxyType(defaults)

    @property
    def spec(self):
        return self._spec

    @property
    def tokens(self):
        return self._tokens

    @property
    def positionals(self):
        return self._positionals

    @property
    def options(self):
        return self._options

    @property
    def defaults(self):
        return self._defaults

    @property
    def usage(self):
        """
        The declaration rebuilt from its raw tokens, single-spaced.
        """
        return " ".join(self._tokens)

    def __contains__(self, name, /):
        return name in self._options or any(positional.name == name for positional in self._positionals)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self._spec)


def declare(spec, /, environ=Unset):
    """
    Build the declaration table for spec.

    environ is the mapping keyword option defaults are read from (os.environ
    when omitted).
    """
    return Declaration(spec, environ)


__all__ = (
    "Positional",
    "KeywordOption",
    "FlagOption",
    "Declaration",
    "split",
    "tokenize",
    "classify",
    "declare",
)
