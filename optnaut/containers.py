"""
Optnaut option containers: the flag registry shared by parsers and groups.

What this module provides
- OptionContainer: ordered collection of Option objects plus two lookup indices
  (short letter -> option, long name -> option) and the resolution rules
  (exact short lookup, long lookup with unambiguous prefix abbreviation).
- OptionGroup: a titled, separately rendered cluster of options owned by one
  parser. Its names are merged into the parser's indices when it is attached,
  so lookups always go through the parser.

Ownership
- Every container carries an explicit handle to the parser whose indices must
  stay conflict-free: a parser points to itself, a group to its owner. No
  virtual "get parser" hook is involved.

Invariant
- Within one parser (its own options plus every attached group) no short or
  long spelling is bound to two options; violations raise ValueError at
  registration or attach time.
"""
from .faults import FaultCode, UnknownOptionError, AmbiguousOptionError
from .options import Option
from .utils import *


class OptionContainer:
    """
    Shared registry behavior for OptionParser and OptionGroup.

    Responsibilities
    - Registration: add_option(...) builds (or accepts) an Option, checks the
      spelling invariant, and indexes it.
    - Resolution: resolve_short(letter) and resolve_long(prefix).
    - Introspection: options (rendering order), has_option/get_option.
    """

    description = mirror("description")

    def __init__(self, description="", /):
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__name__.lower()} 'description' must be a string")
        self._description = description
        self._options = []
        self._short = {}
        self._long = {}
        self._parser = self

    @property
    def options(self):
        """
        registered options, in rendering order.
        """
        return tuple(self._options)

    def set_description(self, description, /):
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__name__.lower()} 'description' must be a string")
        self._description = description
        return self

    def add_option(self, *names, **attributes):
        """
        Register a new option and return it for builder-style configuration.

        Forms
        - add_option("-f", "--file", dest="path", help="...") -> Option
        - add_option(Option("-f", "--file")) -> the same Option

        Raises
        - TypeError / ValueError from Option construction.
        - ValueError when a spelling is already bound in the owning parser.
        """
        if len(names) == 1 and isinstance(names[0], Option):
            if attributes:
                raise TypeError("add_option() cannot combine an option instance with attributes")
            option = names[0]
        else:
            option = Option(*names, **attributes)

        if option in self._options:
            raise ValueError(f"option {option} is already registered")
        _check_conflicts(option, self, self._parser)

        self._options.append(option)
        _index(option, self)
        # options added to an attached group must be visible to the parser lookups
        if self._parser is not self and self in self._parser._groups:
            _index(option, self._parser)
        return option

    def has_option(self, name, /):
        return self.get_option(name) is not None

    def get_option(self, name, /):
        """
        exact lookup by spelling ("-x" or "--name"); None when not registered here.
        """
        if not isinstance(name, str):
            raise TypeError("get_option() argument must be a string")
        if name.startswith("--"):
            return self._long.get(name[2:])
        if name.startswith("-") and len(name) == 2:
            return self._short.get(name[1])
        return None

    def resolve_short(self, letter, /):
        """
        exact short-letter lookup.

        raises
        - UnknownOptionError ("no such option: -x") when the letter is not bound.
        """
        try:
            return self._short[letter]
        except KeyError:
            raise UnknownOptionError(
                "no such option: -%s" % letter,
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                input="-" + letter,
            ) from None

    def resolve_long(self, prefix, /):
        """
        long-name lookup with prefix abbreviation.

        rules
        - an exact match wins immediately, even when it is also a prefix of others.
        - otherwise the registered names starting with prefix are collected:
          • exactly one → that option.
          • none → UnknownOptionError ("no such option: --foo").
          • several → AmbiguousOptionError carrying the sorted candidates
            ("ambiguous option: --foob (--foobar, --foobaz?)").

        returns
        - (name, option): the resolved long name (without dashes) and its option.
        """
        try:
            return prefix, self._long[prefix]
        except KeyError:
            pass

        candidates = sorted(name for name in self._long if name.startswith(prefix))
        if not candidates:
            raise UnknownOptionError(
                "no such option: --%s" % prefix,
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                input="--" + prefix,
            )
        if len(candidates) > 1:
            raise AmbiguousOptionError(
                "ambiguous option: --%s (%s?)" % (prefix, ", ".join("--" + name for name in candidates)),
                title="ambiguous option",
                code=FaultCode.AMBIGUOUS_OPTION,
                input="--" + prefix,
                candidates=tuple("--" + name for name in candidates),
            )
        return candidates[0], self._long[candidates[0]]

    def __rich_repr__(self):
        yield "description", self.description
        yield "options", self.options


class OptionGroup(OptionContainer):
    """
    Titled cluster of options rendered under its own heading.

    Parameters
    - parser: the OptionParser that owns the group (explicit parent handle).
    - title: heading shown in help ("  <title>:").
    - description: optional paragraph wrapped under the heading.

    Notes
    - The group is only usable for parsing once attached with
      parser.add_option_group(group); attaching merges its names into the
      parser's indices.
    """

    title = mirror("title")

    def __init__(self, parser, title, description="", /):
        if not isinstance(parser, OptionContainer) or parser._parser is not parser:
            raise TypeError("option group 'parser' must be an option parser")
        if not isinstance(title, str):
            raise TypeError("option group 'title' must be a string")
        super().__init__(description)
        self._parser = parser
        self._title = title

    @property
    def parser(self):
        return self._parser

    def set_title(self, title, /):
        if not isinstance(title, str):
            raise TypeError("option group 'title' must be a string")
        self._title = title
        return self

    def __repr__(self):
        return "option-group(title=%r, options=%r)" % (self._title, self.options)


def _check_conflicts(option, *containers):
    """
    raise ValueError when any spelling of option is already bound in one of containers.
    """
    conflicts = []
    for letter in option.short_names:
        if any(letter in container._short for container in containers):
            conflicts.append("-" + letter)
    for name in option.long_names:
        if any(name in container._long for container in containers):
            conflicts.append("--" + name)
    if conflicts:
        raise ValueError("conflicting option string(s): %s" % ", ".join(conflicts))


def _index(option, container):
    for letter in option.short_names:
        container._short[letter] = option
    for name in option.long_names:
        container._long[name] = option


__all__ = (
    "OptionContainer",
    "OptionGroup",
)
