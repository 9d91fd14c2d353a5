"""
Text decoration helpers.

Every helper returns a rich Text carrying the requested style. Whether the style
reaches the terminal is decided by the console that prints it: rich drops styles
when the stream is not an interactive terminal, so decorated text degrades to
plain text in pipes and log files.

    >>> from scriptkit.colors import bd, r
    >>> Text.assemble(r("Error:"), " ", bd("disk full"))
"""
from rich.text import Text


def decorate(style, /, *text):
    """
    Join the text fragments with spaces and apply a rich style to the result.

    style is any rich style definition ("bold", "underline", "color(3)", ...).
    Fragments that already are Text keep their own spans.
    """
    if not isinstance(style, str):
        raise TypeError("decorate() first argument must be a style string")
    result = Text(" ").join(
        fragment if isinstance(fragment, Text) else Text(str(fragment)) for fragment in text
    )
    # Inner spans win over the outer style (e.g. a bold red word inside yellow text).
    result.stylize_before(style)
    return result


def color(code, /, *text):
    """
    Color the text with an index of the 256-color palette (1 red, 2 green, ...).
    """
    if not isinstance(code, int) or isinstance(code, bool):
        raise TypeError("color() first argument must be an integer")
    if not 0 <= code <= 255:
        raise ValueError("color() first argument must be a palette index between 0 and 255")
    return decorate("color(%d)" % code, *text)


def bd(*text):
    return decorate("bold", *text)


def ul(*text):
    return decorate("underline", *text)


def r(*text):
    return color(1, *text)


def g(*text):
    return color(2, *text)


def y(*text):
    return color(3, *text)


def b(*text):
    return color(4, *text)


def v(*text):
    return color(5, *text)


__all__ = (
    "decorate",
    "color",
    "bd",
    "ul",
    "r",
    "g",
    "y",
    "b",
    "v",
)
