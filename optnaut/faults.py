"""
Optnaut faults (errors, warnings, exit signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  problem. Codes are grouped by domain to keep logs/searches predictable.
- OptionFault: base type for fatal parse errors; carries message + options and
  knows how to render itself in the classic "usage + prog: error: detail" shape
  (optionally styled or framed via rich).
- ParserExit: control-flow signal meaning "stop now with this text and this
  status" (help, version, explicit exits). The parse core raises it instead of
  calling sys.exit so embedding code and tests keep control.
- OptionWarning: soft, non-fatal diagnostics routed through the warnings module.
- trigger(): central entry point to surface any of the above (print + exit for
  faults and exits, warnings.warn for warnings).

Integration
- OptionParser.parse() raises faults/exits; OptionParser.parse_args() is the
  thin boundary that hands them to trigger().
- Host applications may expose __styles__ (rich styles) and __codes__ (code
  labels) mappings in __main__ to customize rendering.
"""
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - option resolution (1110x)
      • UNKNOWN_OPTION, AMBIGUOUS_OPTION
    - option values (1111x)
      • MISSING_ARGUMENT, INVALID_VALUE, INVALID_CHOICE
    - delegated errors (1113x)
      • DELEGATED_ERROR (raised by callbacks or host code via parser.error())
    - warnings (12xxx)
      • UNBOUND_CALLBACK
    """
    # --- option resolution errors (11xxx) ---
    UNKNOWN_OPTION   = 11101
    AMBIGUOUS_OPTION = 11102

    # --- option value errors (11xxx) ---
    MISSING_ARGUMENT = 11111
    INVALID_VALUE    = 11112
    INVALID_CHOICE   = 11113

    # --- delegated errors (11xxx) ---
    DELEGATED_ERROR  = 11131

    # --- warnings (12xxx) ---
    UNBOUND_CALLBACK = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionFault(Exception):
    """
    base class of every fatal parse error.

    options (all optional, merged by the parser before surfacing)
    - code: FaultCode
    - title: short lowercase title used by the fancy renderer
    - usage: rendered usage block ("" when suppressed)
    - prog: program name used in the "prog: error: ..." line
    - colorful / fancy: rich rendering switches
    - input / value / candidates / choices: context of the failure
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def render(self):
        """
        exact plain-text report: usage block, blank line, then "prog: error: message".
        """
        report = ""
        if usage := self.options.get("usage", ""):
            report += usage + "\n"
        if prog := self.options.get("prog", ""):
            return report + "%s: error: %s\n" % (prog, self.message)
        return report + "error: %s\n" % self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "usage": "#9CA3AF",  # muted usage block
            "error-label": "bold #FF4DA6",
            "error-message": "#C8C8D0",  # soft light gray message
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), style)

        prog = self.options.get("prog", "")
        usage = text(self.options.get("usage", ""), styler("usage"))

        line = Text()
        if prog:
            line.append(text(prog, styler("prog-name"))).append(": ")
        line.append(text("error", styler("error-label"))).append(": ")
        line.append(text(self.message, styler("error-message")))

        if self.options.get("fancy", False):
            header = Text.assemble(
                "[ ",
                text(prog or "error", styler("prog-name")),
                " — ",
                text(self.options["code"].normalize() if "code" in self.options else "", styler("code")),
                " | ",
                text(self.options.get("title", "error").title(), styler("error-title")),
                " ]"
            )
            return Panel(Group(usage, line) if usage else line, title=header, title_align="left")

        if usage:
            return Text.assemble(usage, "\n", line)
        return line

    def __trigger__(self) -> None:
        console.print(self, soft_wrap=not self.options.get("fancy", False), highlight=False)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(OptionFault): ...


class AmbiguousOptionError(OptionFault):
    @property
    def candidates(self):
        return tuple(self.options.get("candidates", ()))


class MissingArgumentError(OptionFault): ...
class InvalidValueError(OptionFault): ...


class InvalidChoiceError(OptionFault):
    @property
    def choices(self):
        return tuple(self.options.get("choices", ()))


class OptionError(OptionFault): ...


class ParserExit(Exception):
    """
    "terminate with this status and this text" signal.

    raised by the parse core for help/version (status 0) and by
    OptionParser.exit(); surfaced by trigger(), which prints the text and
    exits the process with the carried status.
    """

    def __init__(self, status=0, text="", /, **options):
        assert isinstance(status, int) and isinstance(text, str)
        super().__init__(status, text)
        self.status = status
        self.text = text
        self.options = MappingProxyType(options)

    @property
    def stderr(self):
        return self.options.get("stderr", False)

    def __trigger__(self) -> None:
        if self.text:
            Console(stderr=self.stderr).print(Text(self.text), end="", soft_wrap=True, highlight=False)
        sys.exit(self.status)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.status, self.text, **{**self.options, **overrides})


class HelpExit(ParserExit): ...
class VersionExit(ParserExit): ...


class OptionWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __trigger__(self) -> None:
        warnings.warn(self, stacklevel=4)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnboundCallbackWarning(OptionWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault, exit signal or warning with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - faults print to stderr and exit with status 1, exit signals print their text
      and exit with their status, warnings go through warnings.warn.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "OptionFault",
    "UnknownOptionError",
    "AmbiguousOptionError",
    "MissingArgumentError",
    "InvalidValueError",
    "InvalidChoiceError",
    "OptionError",
    "ParserExit",
    "HelpExit",
    "VersionExit",
    "OptionWarning",
    "UnboundCallbackWarning",
    "trigger",
)
