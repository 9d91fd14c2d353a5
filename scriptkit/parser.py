"""
Scriptkit parser: match an invocation against a declaration.

What this module provides
- parse_args(spec, prompt): the reusable parser. Returns Bindings or raises a
  fault (see scriptkit.faults); it never prints and never exits.
- run(spec, prompt): the top-level entry point for scripts. Returns Bindings,
  or prints help/diagnostics on stderr and exits with status 1.
- Bindings: the read-only result mapping, also usable through attributes.

Quick start
    \"\"\"
    Convert a report to HTML.
    \"\"\"
    from scriptkit import run

    args = run("infile [--outfile=<path>] [--force]")
    if args.force:
        ...

Invocation rules
- "-h" or "--help" anywhere wins over everything else (HelpRequested).
- "--name=value" sets a keyword option (the last occurrence wins).
- "--name" sets a flag to True.
- anything else fills the next positional, verbatim.

Results are created fresh on every call and nothing outside the call is
modified, so calls are independent of each other.
"""
import shlex
import sys
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from warnings import catch_warnings, simplefilter, warn_explicit

from .declarations import Declaration, FlagOption, KeywordOption
from .faults import *
from .utils import Unset, normalize, ordinal

HELPERS = ("-h", "--help")


class Bindings(Mapping):
    """
    Read-only mapping from every declared binding target to its value.

    Values are str for positionals and supplied keyword options, bool for
    flags, and None for keyword options that were neither supplied nor seeded
    from the environment. Iteration follows the declaration: positionals first
    in order, then options.
    """
    __slots__ = ("_values",)

    def __init__(self, values=(), /):
        object.__setattr__(self, "_values", MappingProxyType(dict(values)))

    def __getitem__(self, name, /):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __getattr__(self, name, /):
        values = object.__getattribute__(self, "_values")
        try:
            return values[name]
        except KeyError:
            raise AttributeError("bindings have no argument %r" % name) from None

    def __setattr__(self, name, value, /):
        raise AttributeError("bindings are read-only")

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % item for item in self._values.items()))

    def export(self):
        """
        Render the bindings as shell assignments, one per line.

        Values are quoted with shlex.quote so they survive "eval" unchanged;
        flags become true/false and unset options an empty string.
        """
        lines = []
        for name, value in self._values.items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            elif value is None:
                value = ""
            lines.append("%s=%s" % (name, shlex.quote(value)))
        return "\n".join(lines)


def _tokens(prompt):
    """
    Normalize a prompt into a list of argument strings.

    - Unset: sys.argv[1:].
    - str: shell-style split via shlex.split.
    - Iterable[str]: taken verbatim (never trimmed; empty strings are kept).
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse_args() prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse_args() prompt must be a string or an iterable of strings")


def parse_args(spec, prompt=Unset, /, *, environ=Unset):
    """
    Parse an invocation against a declaration and return its Bindings.

    Parameters
    - spec: str | Declaration
      The declaration, e.g. "infile [--outfile=<path>] [--force]".
    - prompt: Unset | str | Iterable[str]
      The invocation; sys.argv[1:] when omitted.
    - environ: Mapping[str, str]
      Where keyword option defaults come from (os.environ when omitted).

    Raises
    - HelpRequested: "-h" or "--help" is among the arguments.
    - UnrecognizedOptionError / UnrecognizedFlagError: undeclared "--name=value" / "--name".
    - FlagAssignmentError: "--name=value" where name is a flag.
    - MissingOptionValueError: "--name" where name is a keyword option.
    - UnexpectedPositionalError: more positionals than declared.
    - MissingPositionalError: a declared positional is missing or empty
      (only the first one is reported).
    - DeclarationError: the declaration itself is malformed.

    Warns
    - EmptyOptionValueWarning: "--name=" with an empty value (the empty string is bound).
    """
    tokens = _tokens(prompt)

    # Help short-circuits every other check, including a malformed declaration.
    if any(token in HELPERS for token in tokens):
        raise HelpRequested(input=next(token for token in tokens if token in HELPERS))

    declaration = spec if isinstance(spec, Declaration) else Declaration(spec, environ)
    usage = declaration.usage

    options = dict(declaration.defaults)
    positionals = dict.fromkeys((positional.name for positional in declaration.positionals), Unset)
    pending = iter(declaration.positionals)

    for index, token in enumerate(tokens, start=1):
        if token.startswith("--") and "=" in token:
            key, _, value = token.removeprefix("--").partition("=")
            argument = declaration.options.get(name := normalize(key))

            if argument is None:
                raise UnrecognizedOptionError(
                    "unrecognized option %r%s" % (key, position(index)),
                    input=key,
                    index=index,
                    usage=usage,
                )
            if isinstance(argument, FlagOption):
                raise FlagAssignmentError(
                    "flag %r%s cannot take a value (use --%s)" % (key, position(index), argument.spelling),
                    input=key,
                    index=index,
                    usage=usage,
                )
            if not value:
                trigger(EmptyOptionValueWarning(
                    "empty value for option %r%s" % (key, position(index)),
                    input=key,
                    index=index,
                ))
            options[name] = value

        elif token.startswith("--"):
            key = token.removeprefix("--")
            argument = declaration.options.get(name := normalize(key))

            if argument is None:
                raise UnrecognizedFlagError(
                    "unrecognized flag %r%s" % (key, position(index)),
                    input=key,
                    index=index,
                    usage=usage,
                )
            if isinstance(argument, KeywordOption):
                raise MissingOptionValueError(
                    "option %r%s requires a value (use --%s=%s)" % (
                        key, position(index), argument.spelling, argument.placeholder
                    ),
                    input=key,
                    index=index,
                    usage=usage,
                )
            options[name] = True

        else:
            try:
                argument = next(pending)
            except StopIteration:
                raise UnexpectedPositionalError(
                    "unexpected positional argument %r%s" % (token, position(index)),
                    input=token,
                    index=index,
                    usage=usage,
                ) from None
            positionals[argument.name] = token

    for number, argument in enumerate(declaration.positionals, start=1):
        if not positionals[argument.name]:
            raise MissingPositionalError(
                "missing %s positional argument %r" % (ordinal(number), argument.spelling),
                input=argument.name,
                index=number,
                usage=usage,
            )

    return Bindings(positionals | options)


def run(spec, prompt=Unset, /, *, prog=Unset, source=Unset, environ=Unset, shell=True, colorful=True):
    """
    Entry point for scripts: parse, and turn faults into output plus exit status.

    Parameters
    - spec, prompt, environ: as for parse_args().
    - prog: program name for usage lines (default: __main__.__prog__ or the script name).
    - source: file whose documentation "--help" prints (default: the __main__ script).
    - shell: when True, print faults on stderr and exit with status 1 (help included);
      when False, raise them instead.
    - colorful: when False, print diagnostics without styles.

    Returns
    - Bindings on success.
    """
    options = {
        "shell": shell,
        "colorful": colorful,
    }
    if prog is not Unset:
        options["prog"] = prog
    if source is not Unset:
        options["source"] = source

    try:
        with catch_warnings(record=True) as caught:
            simplefilter("always", EmptyOptionValueWarning)
            bindings = parse_args(spec, prompt, environ=environ)
    except (HelpRequested, UsageError) as fault:
        trigger(fault, **options)
        raise  # unreachable: trigger() raises or exits

    for warning in caught:
        if isinstance(warning.message, EmptyOptionValueWarning):
            trigger(warning.message, **options)
        else:
            warn_explicit(warning.message, warning.category, warning.filename, warning.lineno, source=warning.source)

    return bindings


__all__ = (
    "Bindings",
    "parse_args",
    "run",
)
