r"""
Optnaut option declarations.

Overview
- Option: one declared flag, bound to one or more short (-x) and/or long (--name)
  spellings and to a single destination key.
- Built with a chainable builder (set_action(...).set_type(...).set_help(...)) or
  with keyword attributes (Option("-f", "--file", dest="path", help="...")); both
  paths go through the same setters.
- Frozen by the owning parser before its first scan: later mutation raises, so
  the lookup indices can never disagree with the options they point to.

Metadata
- action: store (default), store_const, store_true, store_false, append,
  append_const, count, help, version, callback ("show_help"/"show_version" are
  accepted as aliases of help/version).
- type: string (default), int, long, float, double, complex, choice, or None
  (no value). Setting choices implies type "choice"; action "callback" resets
  the type to None until a type is set again.
- nargs: derived arity, 0 or 1, never set directly.
- dest: explicit, else first long name with '-' replaced by '_', else first
  short letter.
- metavar: explicit, else dest upper-cased.
- default / const: stored as strings (see utils.stringify).

Validation highlights
- Short names are a single dash plus exactly one character; long names are two
  dashes plus a name without '=' or whitespace.
- Duplicate spellings within one option are rejected.
- Unknown actions/types and unexpected keyword attributes are rejected.

Quick example:
    >>> verbose = Option("-v", "--verbose").set_action("count").set_help("more output")
    >>> verbose.dest, verbose.nargs
    ('verbose', 0)
"""
import re

from .faults import FaultCode, InvalidValueError, InvalidChoiceError
from .utils import *

SUPPRESS_HELP = "SUPPRESS" "HELP"
SUPPRESS_USAGE = "SUPPRESS" "USAGE"

ACTIONS = (
    "store",
    "store_const",
    "store_true",
    "store_false",
    "append",
    "append_const",
    "count",
    "help",
    "version",
    "callback",
)

TYPES = (
    "string",
    "int",
    "long",
    "float",
    "double",
    "complex",
    "choice",
)

_ALIASES = {"show_help": "help", "show_version": "version"}

# Actions whose arity is always zero.
_NULLARY = frozenset({
    "store_const",
    "store_true",
    "store_false",
    "append_const",
    "count",
    "help",
    "version",
})

# ASCII literals accepted by check_type(); digit separators, unicode digits,
# nan and infinity are rejected
_INTEGER = r"[+-]?[0-9]+"
_REAL = r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
_IMAGINARY = r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[jJ]"

# type -> (literal pattern, label used in "invalid <label> value")
_CHECKERS = {
    "int": (re.compile(_INTEGER), "integer"),
    "long": (re.compile(_INTEGER), "integer"),
    "float": (re.compile(_REAL), "floating-point"),
    "double": (re.compile(_REAL), "floating-point"),
    "complex": (re.compile(f"{_REAL}|{_IMAGINARY}|{_REAL}{_IMAGINARY}"), "complex"),
}


def _builder(method):
    """
    wrap a setter so it refuses frozen options and returns the option (chaining).
    """
    def wrapper(self, *args, **kwargs):
        if self._frozen:
            raise TypeError(f"option {self} is frozen and cannot be modified")
        method(self, *args, **kwargs)
        return self

    wrapper.__doc__ = method.__doc__
    return rename(wrapper, method.__name__)


class Option:
    """
    Declarative description of one command-line flag.

    Highlights
    - Aliases: any mix of short (-x) and long (--name) spellings; all of them
      resolve to the same option and store under the same destination.
    - Builder: every set_* method validates its input and returns the option.
    - Introspection: read-only properties expose the sanitized metadata; the
      containers (names, choices) are handed out as tuples.
    """

    __displayable__ = (
        "short_names",
        "long_names",
        "action",
        "type",
        "dest",
        "default",
        "nargs",
    )

    action = mirror("action")
    type = mirror("type")
    default = mirror("default")
    const = mirror("const")
    choices = mirror("choices")
    optional_value = mirror("optional_value")
    help = mirror("help")
    callback = mirror("callback")
    frozen = mirror("frozen")

    def __init__(self, *names, **attributes):
        """
        Construct an option from its spellings and optional keyword attributes.

        Parameters
        - names: one or more str ("-x" or "--name").
        - attributes: any of action, type, dest, default, const, choices,
          optional_value, help, metavar, callback. action is applied first and
          type second so the derived arity does not depend on keyword order.

        Raises
        - TypeError: no names, non-string names, or unknown attributes.
        - ValueError: malformed or duplicated names, invalid attribute values.
        """
        if not names:
            raise TypeError("option must specify at least one name")

        self._frozen = False
        self._names = []
        self._short_names = set()
        self._long_names = set()
        self._dest = Unset
        self._action = "store"
        self._type = "string"
        self._default = ""
        self._const = ""
        self._choices = ()
        self._optional_value = False
        self._help = ""
        self._metavar = ""
        self._callback = None

        fallback = Unset
        for name in names:
            if not isinstance(name, str):
                raise TypeError("option names must be strings")
            if name in self._names:
                raise ValueError(f"option names cannot contain duplicates ({name!r})")
            if re.fullmatch(r"--[^-=\s][^=\s]*", name):
                self._long_names.add(name[2:])
                # the first long spelling decides the destination
                if self._dest is Unset:
                    self._dest = name[2:].replace("-", "_")
            elif re.fullmatch(r"-[^-\s]", name):
                self._short_names.add(name[1])
                fallback = coalesce(fallback, name[1])
            else:
                raise ValueError(f"option name {name!r} must look like '-x' or '--name'")
            self._names.append(name)
        self._dest = coalesce(self._dest, fallback)

        for attribute in sorted(attributes, key=lambda x: {"action": 0, "type": 1}.get(x, 2)):
            try:
                setter = getattr(self, "set_" + attribute)
            except AttributeError:
                raise TypeError(f"option got an unexpected attribute {attribute!r}") from None
            setter(attributes[attribute])

    @property
    def names(self):
        """
        spellings as declared (dashes included, declaration order).
        """
        return tuple(self._names)

    @property
    def short_names(self):
        return tuple(sorted(self._short_names))

    @property
    def long_names(self):
        return tuple(sorted(self._long_names))

    @property
    def dest(self):
        return self._dest

    @property
    def metavar(self):
        return self._metavar or self._dest.upper()

    @property
    def nargs(self):
        """
        derived arity: 0 or 1.
        """
        if self._action in _NULLARY:
            return 0
        if self._action == "callback":
            return 0 if self._type is None else 1
        return 1

    @_builder
    def set_action(self, action):
        """
        set the action; "callback" also clears the type (arity 0 until typed).
        """
        if not isinstance(action, str):
            raise TypeError("option 'action' must be a string")
        action = _ALIASES.get(action, action)
        if action not in ACTIONS:
            raise ValueError(f"option 'action' must be one of {', '.join(ACTIONS)} (got {action!r})")
        self._action = action
        if action == "callback":
            self._type = None

    @_builder
    def set_type(self, type):
        if type is None or type == "none":
            self._type = None
            return
        if not isinstance(type, str):
            raise TypeError("option 'type' must be a string or None")
        if type not in TYPES:
            raise ValueError(f"option 'type' must be one of {', '.join(TYPES)} (got {type!r})")
        self._type = type

    @_builder
    def set_dest(self, dest):
        if not isinstance(dest, str):
            raise TypeError("option 'dest' must be a string")
        if not (dest := dest.strip()):
            raise ValueError("option 'dest' cannot be empty")
        self._dest = dest

    @_builder
    def set_default(self, default):
        self._default = stringify(default)

    @_builder
    def set_const(self, const):
        self._const = stringify(const)

    @_builder
    def set_choices(self, choices):
        """
        set the allowed values (declaration order kept) and switch the type to "choice".
        """
        if isinstance(choices, str):
            raise TypeError("option 'choices' must be an iterable of strings, not a string")
        sanitized = []
        for choice in map(stringify, choices):
            if choice in sanitized:
                raise ValueError(f"option 'choices' cannot contain duplicates ({choice!r})")
            sanitized.append(choice)
        self._choices = tuple(sanitized)
        self._type = "choice"

    @_builder
    def set_optional_value(self, optional_value=True):
        self._optional_value = bool(optional_value)

    @_builder
    def set_help(self, help):
        if not isinstance(help, str):
            raise TypeError("option 'help' must be a string")
        self._help = help

    @_builder
    def set_metavar(self, metavar):
        if not isinstance(metavar, str):
            raise TypeError("option 'metavar' must be a string")
        self._metavar = metavar

    @_builder
    def set_callback(self, callback):
        if not callable(callback):
            raise TypeError("option 'callback' must be callable")
        self._callback = callback

    def freeze(self):
        """
        lock the option; called by the owning parser before scanning.
        """
        self._frozen = True
        return self

    def check_type(self, opt, value):
        """
        validate a raw value against the option type.

        parameters
        - opt: the option string as typed by the user (e.g. "-n" or "--num").
        - value: the raw text to validate.

        raises
        - InvalidValueError for int/long/float/double/complex values that do not parse.
        - InvalidChoiceError for values outside the declared choices.
        """
        if self._type == "choice":
            if value not in self._choices:
                raise InvalidChoiceError(
                    "option %s: invalid choice: '%s' (choose from %s)" % (
                        opt, value, ", ".join("'%s'" % choice for choice in self._choices)
                    ),
                    title="invalid choice",
                    code=FaultCode.INVALID_CHOICE,
                    input=opt,
                    value=value,
                    choices=self._choices,
                )
            return
        try:
            pattern, label = _CHECKERS[self._type]
        except KeyError:
            return
        if not pattern.fullmatch(value):
            raise InvalidValueError(
                "option %s: invalid %s value: '%s'" % (opt, label, value),
                title="invalid %s value" % label,
                code=FaultCode.INVALID_VALUE,
                input=opt,
                value=value,
            )

    def __str__(self):
        return "/".join(self._names)

    def __repr__(self):
        return "option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in self.__displayable__:
            yield name, getattr(self, name)


__all__ = (
    "Option",
    "ACTIONS",
    "TYPES",
    "SUPPRESS_HELP",
    "SUPPRESS_USAGE",
)
