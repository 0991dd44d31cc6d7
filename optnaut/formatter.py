"""
Optnaut help rendering.

What this module provides
- fill(text, indent, width): the greedy word wrapper shared by descriptions,
  epilogs, group descriptions and per-option help.
- HelpFormatter: pure rendering of usage, version and help text from a parser.
  It never mutates the parser or its options; rendering the same parser twice
  yields byte-identical text.

Layout (classic optparse shape)
    Usage: prog [options]

    <description, wrapped at column 0>

    Options:
      -h, --help            show this help message and exit
      -f FILE, --file=FILE  read input from FILE

      <group title>:
        <group description, wrapped at column 4>

        -x, --extra         ...

    <epilog, wrapped at column 0>

Width
- The terminal width comes from an injectable provider (an int or a
  zero-argument callable, default utils.columns) and is read once per render.
- Lines are filled up to width - 2 columns; the last two columns of the
  terminal are never used (classic layout, kept for byte-compatible help).
"""
import re

from .options import SUPPRESS_HELP, SUPPRESS_USAGE
from .utils import *


def fill(text, indent, width, /, *, indent_first=True):
    """
    Greedy line fill.

    rules
    - spaces, tabs and newlines are break points; the break character itself is
      dropped, other whitespace inside a line is kept.
    - a newline always ends the current line.
    - before emitting a word, the line is broken when the word would end past
      width - 2 columns (columns counted from the start of the line, indent
      included). end of text is checked like any other break point.
    - a word longer than a whole line stays alone on its line.
    - the first line is indented only when indent_first; continuation lines are
      always indented. every line ends with a newline.

    examples
    - fill("alpha beta", 2, 80) -> "  alpha beta\\n"
    - fill("alpha beta", 2, 10) -> "  alpha\\n  beta\\n"
    """
    if not isinstance(text, str):
        raise TypeError("fill() first argument must be a string")
    limit = width - 2
    lines = []
    start = 0
    position = 0

    for end in [match.start() for match in re.finditer(r"[ \t\n]", text)] + [len(text)]:
        if end - start + indent > limit and position > start:
            lines.append(text[start:position - 1])
            start = position
        if end < len(text) and text[end] == "\n":
            lines.append(text[start:end])
            start = end + 1
        position = end + 1
    lines.append(text[start:])

    margin = " " * indent
    return "".join(
        (margin if index or indent_first else "") + line + "\n" for index, line in enumerate(lines)
    )


class HelpFormatter:
    """
    Stateless renderer for usage, version and help text.

    Parameters
    - width: Unset | int | Callable[[], int]
      Terminal width or a provider for it. Unset uses utils.columns (rich
      console width: terminal size, then COLUMNS, then 80).
    """

    def __init__(self, width=Unset, /):
        width = coalesce(width, columns)
        if not callable(width) and (not isinstance(width, int) or isinstance(width, bool)):
            raise TypeError("help formatter 'width' must be an integer or a callable")
        if isinstance(width, int) and width <= 0:
            raise ValueError("help formatter 'width' must be a positive integer")
        self._width = width

    def width(self):
        """
        resolve the target width (called once per render).
        """
        width = self._width() if callable(self._width) else self._width
        if not isinstance(width, int) or width <= 0:
            raise ValueError("help formatter width provider must return a positive integer")
        return width

    def format_usage(self, usage, prog, /):
        """
        "Usage: <usage with %prog substituted>\\n", or "" for SUPPRESS_USAGE.
        """
        if usage == SUPPRESS_USAGE:
            return ""
        return "Usage: %s\n" % usage.replace("%prog", prog)

    def format_version(self, version, prog, /):
        return version.replace("%prog", prog)

    def format_option_strings(self, option, indent=2, /):
        """
        names column of one option, indent included.

        - short spellings first (sorted), then long ones (sorted).
        - arity 1: "-x METAVAR" / "--long=METAVAR"; with an optional value
          "-x [METAVAR]" / "--long[=METAVAR]"; arity 0: bare names.
        """
        short = long = ""
        if option.nargs == 1:
            if option.optional_value:
                short, long = " [%s]" % option.metavar, "[=%s]" % option.metavar
            else:
                short, long = " %s" % option.metavar, "=%s" % option.metavar

        strings = ["-%s%s" % (letter, short) for letter in option.short_names]
        strings += ["--%s%s" % (name, long) for name in option.long_names]
        return " " * indent + ", ".join(strings)

    def format_option(self, option, default="", indent=2, width=Unset, /):
        """
        one option entry: names column, then its wrapped help.

        - the help column starts at min(30% of width, 36).
        - a names column at least that wide minus one stands alone and the help
          starts on the next line, fully indented; otherwise it is padded to the
          help column and the help follows on the same line.
        - "%default" in the help is replaced by default only when default is non-empty.
        """
        width = width or self.width()
        strings = self.format_option_strings(option, indent)
        column = min(width * 3 // 10, 36)

        if len(strings) >= column - 1:
            rendered = strings + "\n"
            indent_first = True
        else:
            rendered = strings + " " * (column - len(strings))
            if not option.help:
                rendered += "\n"
            indent_first = False

        if help := option.help:
            if default:
                help = help.replace("%default", default)
            rendered += fill(help, column, width, indent_first=indent_first)
        return rendered

    def format_option_help(self, container, parser, indent=2, width=Unset, /):
        """
        every visible option of container, resolving defaults through parser.

        for the parser itself, the automatic options it has not installed yet
        are listed first, as they will be once it parses.
        """
        width = width or self.width()
        options = container.options
        if container is parser:
            options = parser.automatic_options() + options
        return "".join(
            self.format_option(option, parser.get_default(option), indent, width)
            for option in options
            if option.help != SUPPRESS_HELP
        )

    def format_help(self, parser, /):
        """
        full help text for parser (usage, description, options, groups, epilog).
        """
        width = self.width()
        sections = []

        if parser.usage != SUPPRESS_USAGE:
            sections.append(self.format_usage(parser.usage, parser.prog) + "\n")

        if parser.description:
            sections.append(fill(parser.description, 0, width) + "\n")

        sections.append("Options:\n")
        sections.append(self.format_option_help(parser, parser, 2, width))

        for group in parser.groups:
            sections.append("\n  %s:\n" % group.title)
            if group.description:
                sections.append(fill(group.description, 4, width - 4) + "\n")
            sections.append(self.format_option_help(group, parser, 4, width))

        if parser.epilog:
            sections.append("\n" + fill(parser.epilog, 0, width))

        return "".join(sections)


__all__ = (
    "HelpFormatter",
    "fill",
)
