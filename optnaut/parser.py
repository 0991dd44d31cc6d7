"""
Optnaut parser: registry + scanning loop + action dispatch.

What this module provides
- OptionParser: the top-level container. It owns the options, the attached
  groups, the per-destination default overrides and the help formatter, and
  turns an argument vector into a Values store plus the positional leftovers.

Two entry points
- parse(prompt): the core. Never prints and never exits: problems raise an
  OptionFault subclass, help/version raise a ParserExit subclass.
- parse_args(prompt): the thin process boundary. It calls parse() and hands any
  fault or exit signal to faults.trigger(), which prints through rich and
  exits the process.

Scanning rules (left to right over a token queue)
- "--" ends option scanning; every remaining token is positional.
- "--name[=value]": long option, prefix abbreviation allowed when unambiguous.
- "-xREST": short option; REST is an inline value for value-taking options,
  otherwise a cluster of further short options.
- anything else (including a lone "-") is positional; with interspersed
  arguments disabled the first positional also ends option scanning.

Quick example:
    >>> parser = OptionParser(usage="%prog [options] FILE", prog="tool")
    >>> _ = parser.add_option("-v", "--verbose", action="count")
    >>> values, args = parser.parse(["-vv", "input.txt"])
    >>> values["verbose"], args
    ('2', ['input.txt'])
"""
import re
import shlex
import sys
from collections import deque
from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from .containers import OptionContainer, OptionGroup, _check_conflicts, _index
from .faults import *
from .formatter import HelpFormatter
from .options import Option
from .utils import *
from .values import Values


class OptionParser(OptionContainer):
    """
    Declarative command-line parser.

    Parameters
    - usage: str | Unset
      Usage template, "%prog" is replaced by the program name. A leading
      "usage: " (any case) is dropped. Unset means "%prog [options]";
      SUPPRESS_USAGE hides the usage line everywhere.
    - version: str | Unset
      Version template ("%prog" substituted). When set, a --version option is
      installed automatically (see add_version_option).
    - description, epilog: str
      Paragraphs rendered before and after the options in help.
    - prog: str | Unset
      Program name; Unset derives it from sys.argv[0] at render time.
    - add_help_option, add_version_option: bool
      Install -h/--help and --version before the first scan unless the names
      are taken.
    - interspersed_args: bool
      When False, the first positional argument ends option scanning.
    - colorful, fancy: bool
      Rich rendering switches forwarded to faults (styled text, framed panel).
    - formatter: HelpFormatter | Unset
      Help renderer; Unset creates one bound to the terminal width.

    Raises
    - TypeError: on wrongly typed parameters.
    """

    usage = mirror("usage")
    version = mirror("version")
    epilog = mirror("epilog")
    add_help_option = mirror("add_help_option")
    add_version_option = mirror("add_version_option")
    interspersed_args = mirror("interspersed_args")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    formatter = mirror("formatter")
    groups = mirror("groups")
    defaults = mirror("defaults")
    args = mirror("args")
    parsed_args = mirror("parsed_args")

    def __init__(
            self,
            usage=Unset,
            version=Unset,
            description="",
            epilog="",
            prog=Unset,
            add_help_option=True,
            add_version_option=True,
            interspersed_args=True,
            *,
            colorful=False,
            fancy=False,
            formatter=Unset
    ):
        super().__init__(description)
        metadata = {
            # Help and version texts
            "usage": usage,
            "version": version,
            "epilog": epilog,
            "prog": prog,
            # Behavior switches
            "add_help_option": add_help_option,
            "add_version_option": add_version_option,
            "interspersed_args": interspersed_args,
            # Rendering
            "colorful": colorful,
            "fancy": fancy,
            "formatter": formatter,
        }
        _process_strings(metadata)
        _process_switches(metadata)
        if not isinstance(metadata["formatter"], HelpFormatter | Unset):
            raise TypeError("option parser 'formatter' must be a help formatter")
        metadata["formatter"] = coalesce(metadata["formatter"]) or HelpFormatter()

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._groups = []
        self._defaults = {}
        # latest parse results (replaced wholesale by every parse)
        self._values = None
        self._args = []
        self._parsed_args = []

    @property
    def values(self):
        """
        store of the latest parse (None before the first one).
        """
        return self._values

    @property
    def prog(self):
        """
        program name: explicit, else the base name of sys.argv[0].
        """
        return self._prog or basename(sys.argv[0] if sys.argv else "")

    # ── Configuration ──────────────────────────────────────────────────────

    def set_usage(self, usage, /):
        metadata = {"usage": usage}
        _process_strings(metadata)
        self._usage = metadata["usage"]
        return self

    def set_version(self, version, /):
        metadata = {"version": version}
        _process_strings(metadata)
        self._version = metadata["version"]
        return self

    def set_epilog(self, epilog, /):
        metadata = {"epilog": epilog}
        _process_strings(metadata)
        self._epilog = metadata["epilog"]
        return self

    def set_prog(self, prog, /):
        metadata = {"prog": prog}
        _process_strings(metadata)
        self._prog = metadata["prog"]
        return self

    def set_add_help_option(self, enabled=True, /):
        self._add_help_option = bool(enabled)
        return self

    def set_add_version_option(self, enabled=True, /):
        self._add_version_option = bool(enabled)
        return self

    def enable_interspersed_args(self):
        self._interspersed_args = True
        return self

    def disable_interspersed_args(self):
        self._interspersed_args = False
        return self

    def set_defaults(self, *pair, **pairs):
        """
        Override the default of one or more destinations.

        Forms
        - set_defaults("dest", value)
        - set_defaults(dest=value, other=value)

        Overrides beat the option's own default, both when filling the store
        after a parse and when substituting "%default" in help. Values are
        stored in string form (see utils.stringify).
        """
        match pair:
            case ():
                pass
            case (dest, value):
                if not isinstance(dest, str):
                    raise TypeError("set_defaults() destination must be a string")
                pairs = {dest: value, **pairs}
            case _:
                raise TypeError("set_defaults() takes a destination and a value, or keyword pairs")
        for dest, value in pairs.items():
            self._defaults[dest] = stringify(value)
        return self

    def get_default(self, option, /):
        """
        resolved default of option: the parser override for its dest, else its own default.
        """
        if not isinstance(option, Option):
            raise TypeError("get_default() argument must be an option")
        return self._defaults.get(option.dest, option.default)

    def add_option_group(self, group, description="", /):
        """
        Attach a group, creating it first when a title is given.

        Forms
        - add_option_group(OptionGroup(parser, "Title", "..."))
        - add_option_group("Title", "...") -> the new OptionGroup

        Raises
        - ValueError: the group belongs to another parser, is already attached,
          or one of its names is already bound in this parser.
        """
        if isinstance(group, OptionGroup):
            if description:
                raise TypeError("add_option_group() cannot combine a group instance with a description")
            if group.parser is not self:
                raise ValueError("option group belongs to another parser")
            if group in self._groups:
                raise ValueError(f"option group {group.title!r} is already attached")
        else:
            group = OptionGroup(self, group, description)

        for option in group.options:
            _check_conflicts(option, self)
        for option in group.options:
            _index(option, self)
        self._groups.append(group)
        return group

    # ── Parsing ────────────────────────────────────────────────────────────

    def parse(self, prompt=Unset, /):
        """
        Scan an argument vector and return (values, positionals).

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string, split via shlex.split.
          • Iterable[str]: pre-tokenized; kept as-is (empty strings are valid values).

        Behavior
        - installs the automatic help/version options (once), freezes every
          registered option, then scans the tokens with a fresh Values store.
        - after the scan, every destination still unset receives its resolved
          default when that default is non-empty (parser options first, then
          groups in attach order); defaults are not marked user-set.
        - the new store, positionals and as-parsed log become parser.values,
          parser.args and parser.parsed_args.

        Raises
        - OptionFault subclasses on the first problem (no partial results).
        - HelpExit / VersionExit when a help or version option is seen.
        - whatever a callback raises, unchanged.
        on any of these, parser.values, parser.args and parser.parsed_args keep
        the results of the previous parse.
        """
        tokens = _tokenize(prompt)
        self._install()
        for option in self._every_option():
            option.freeze()

        previous = self._values, self._args, self._parsed_args
        # callbacks observe the store being built through parser.values
        self._values, self._args, self._parsed_args = Values(), [], []
        try:
            self._scan(deque(tokens))
        except BaseException as error:
            # callbacks may raise anything; none of it leaves a half-built store
            self._values, self._args, self._parsed_args = previous
            if isinstance(error, OptionFault):
                raise error.__replace__(**self._fault_options()) from None
            raise

        for option in self._every_option():
            if default := self.get_default(option):
                self._values._fill(option.dest, default)
        return self._values, list(self._args)

    def parse_args(self, prompt=Unset, /):
        """
        Process boundary around parse(): same arguments and results, but faults
        and exit signals are printed and terminate the process (status 1 for
        faults, the carried status for help/version/exit).
        """
        try:
            return self.parse(prompt)
        except (OptionFault, ParserExit) as fault:
            trigger(fault)

    def _scan(self, tokens):
        while tokens:
            token = tokens.popleft()

            if token == "--":
                break
            if token.startswith("--"):
                self._parsed_args.append(token)
                self._parse_long(token[2:], tokens)
            elif token.startswith("-") and len(token) > 1:
                self._parse_short(token, tokens)
            else:
                self._args.append(token)
                if not self._interspersed_args:
                    break
        self._args.extend(tokens)

    def _parse_long(self, token, tokens):
        name, delimiter, value = token.partition("=")
        name, option = self.resolve_long(name)

        if option.nargs == 1 and not delimiter and tokens:
            value = tokens.popleft()
            self._parsed_args.append(value)

        if option.nargs == 1 and not value:
            raise MissingArgumentError(
                "--%s option requires an argument" % name,
                title="missing argument",
                code=FaultCode.MISSING_ARGUMENT,
                input="--" + name,
            )
        self._process(option, "--" + name, value)

    def _parse_short(self, token, tokens):
        letter, rest = token[1], token[2:]
        self._parsed_args.append("-" + letter)
        option = self.resolve_short(letter)
        value = ""

        if option.nargs == 1:
            if rest:
                value = rest
            elif tokens:
                value = tokens.popleft()
                self._parsed_args.append(value)
            elif option.optional_value:
                value = self.get_default(option)
                self._parsed_args.append(value)
            else:
                raise MissingArgumentError(
                    "-%s option requires an argument" % letter,
                    title="missing argument",
                    code=FaultCode.MISSING_ARGUMENT,
                    input="-" + letter,
                )
        elif rest:
            # the remaining letters form a cluster of further short options
            tokens.appendleft("-" + rest)

        self._process(option, "-" + letter, value)

    def _process(self, option, opt, value):
        """
        dispatch one matched option to its action.
        """
        values = self._values
        match option.action:
            case "store":
                option.check_type(opt, value)
                values._store(option.dest, value)
            case "store_const":
                values._store(option.dest, option.const)
            case "store_true":
                values._store(option.dest, "1")
            case "store_false":
                values._store(option.dest, "0")
            case "append":
                option.check_type(opt, value)
                values._append(option.dest, value)
            case "append_const":
                values._append(option.dest, option.const)
            case "count":
                try:
                    count = int(values.get(option.dest, "0"))
                except ValueError:
                    count = 0
                values._store(option.dest, str(count + 1))
            case "help":
                raise HelpExit(0, self.format_help())
            case "version":
                raise VersionExit(0, self.format_version() + "\n")
            case "callback":
                if option.callback is None:
                    trigger(UnboundCallbackWarning(
                        "option %s has no callback bound and was ignored" % opt,
                        code=FaultCode.UNBOUND_CALLBACK,
                        input=opt,
                    ))
                    return
                option.check_type(opt, value)
                option.callback(option, opt, value, self)

    def automatic_options(self):
        """
        the help/version options the next parse() would install, in rendering order.

        an option is left out when it is disabled or one of its names is
        already bound. the registry is not touched.
        """
        options = []
        if (
            self._add_version_option and
            self._version and
            not self.has_option("--version")
        ):
            options.append(Option("--version", action="version", help="show program's version number and exit"))
        if (
            self._add_help_option and
            not self.has_option("-h") and
            not self.has_option("--help")
        ):
            options.append(Option("-h", "--help", action="help", help="show this help message and exit"))
        return tuple(options)

    def _install(self):
        """
        install the automatic options in front of the others (before scanning).

        once installed their names are bound, so later calls are no-ops.
        """
        options = self.automatic_options()
        for option in options:
            _index(option, self)
        self._options[:0] = options

    def _every_option(self):
        yield from self._options
        for group in self._groups:
            yield from group.options

    def _fault_options(self):
        return {
            "usage": self.format_usage(),
            "prog": self.prog,
            "colorful": self._colorful,
            "fancy": self._fancy,
        }

    # ── Output ─────────────────────────────────────────────────────────────

    def format_usage(self):
        return self._formatter.format_usage(self._usage, self.prog)

    def format_version(self):
        return self._formatter.format_version(self._version, self.prog)

    def format_help(self):
        """
        full help text; automatic options not installed yet are listed anyway.
        """
        return self._formatter.format_help(self)

    def print_help(self):
        _print(self.format_help())

    def print_usage(self, stderr=False):
        _print(self.format_usage(), stderr=stderr)

    def print_version(self):
        _print(self.format_version() + "\n")

    def error(self, message, /):
        """
        raise an OptionError for message (meant for callbacks and host code).

        parse() propagates it like any other fault; parse_args() prints the
        usage and "prog: error: message" to stderr and exits with status 1.
        """
        if not isinstance(message, str):
            raise TypeError("error() argument must be a string")
        raise OptionError(
            message,
            title="error",
            code=FaultCode.DELEGATED_ERROR,
            **self._fault_options(),
        )

    def exit(self, status=1, text="", /):
        """
        raise a ParserExit carrying status and text (printed to stderr when surfaced).
        """
        raise ParserExit(status, text, stderr=True)

    def __repr__(self):
        return "option-parser(prog=%r, options=%r, groups=%r)" % (self.prog, self.options, self.groups)

    def __rich_repr__(self):
        yield "prog", self.prog
        yield "usage", self.usage
        yield "version", self.version
        yield from super().__rich_repr__()
        yield "groups", self.groups


def _process_strings(metadata):
    """
    Normalize the scalar string settings present in metadata.

    - usage: str | Unset; a leading "usage: " (any case) is dropped and Unset
      becomes "%prog [options]".
    - version, epilog: str | Unset; Unset becomes "".
    - prog: str | Unset; Unset is kept (derived from sys.argv[0] when read).

    Errors
    - TypeError: when a value is not str | Unset.
    """
    for name in ("usage", "version", "epilog", "prog"):
        if name not in metadata:
            continue
        if not isinstance(object := metadata[name], str | Unset):
            raise TypeError(f"option parser {name!r} must be a string")
        match name:
            case "usage":
                metadata[name] = re.sub(r"(?i)^usage: ", "", coalesce(object, "%prog [options]"))
            case "prog":
                metadata[name] = object
            case _:
                metadata[name] = coalesce(object, "")


def _process_switches(metadata):
    """
    Coerce the boolean settings present in metadata.
    """
    for name in (
            "add_help_option",
            "add_version_option",
            "interspersed_args",
            "colorful",
            "fancy",
    ):
        if name in metadata:
            metadata[name] = bool(metadata[name])


def _tokenize(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


def _print(text, *, stderr=False):
    if text:
        Console(stderr=stderr).print(Text(text), end="", soft_wrap=True, highlight=False)


__all__ = (
    "OptionParser",
)
