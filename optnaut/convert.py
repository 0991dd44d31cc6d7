"""
Typed decoding of stored option values.

The parse core keeps every value as text; this module is the separate,
fallible step that turns that text into a Python scalar when a caller asks for
one (Values.get_as). Failures raise ValueError instead of silently returning a
zero value.
"""

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})

_KINDS = {
    "bool": bool,
    "int": int,
    "long": int,
    "float": float,
    "double": float,
    "complex": complex,
    "str": str,
    "string": str,
}


def decode(text, kind, /):
    """
    convert stored text into kind.

    parameters
    - text: str, the stored value.
    - kind: bool | int | float | complex | str, or one of their names
      ("bool", "int", "long", "float", "double", "complex", "str", "string").

    returns
    - the decoded scalar.

    raises
    - TypeError when text is not a string or kind is not supported.
    - ValueError when the text does not decode.

    examples
    - decode("3", int)       -> 3
    - decode("yes", "bool")  -> True
    - decode("1+2j", complex) -> (1+2j)
    """
    if not isinstance(text, str):
        raise TypeError("decode() first argument must be a string")
    if isinstance(kind, str):
        try:
            kind = _KINDS[kind]
        except KeyError:
            raise TypeError(f"decode() does not support kind {kind!r}") from None
    if kind not in (bool, int, float, complex, str):
        raise TypeError(f"decode() does not support kind {kind!r}")

    if kind is str:
        return text
    if kind is bool:
        lowered = text.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise ValueError(f"invalid boolean value: {text!r}")
    try:
        return kind(text)
    except ValueError:
        raise ValueError(f"invalid {kind.__name__} value: {text!r}") from None


__all__ = ("decode",)
