r"""
Commando option records and the per-option value pipeline.

Overview
- Option: one declared named option (-u/--username) or positional argument (0, 1, ...).
  Holds the declaration metadata and the value resolved by the last parse pass.
- OptionKind: NAMED for string names, POSITIONAL for integer indices. The kind also
  provides the word used in messages ("option" / "argument").

Value pipeline (set_value)
- None resets the option to "unset".
- Otherwise the validation rule (if any) is asked first; a falsy answer raises
  ValidationError and the mapper is never called.
- The mapper (if any) then turns the raw value into the stored one, exactly once.
- A rule or mapper that raises is reported as a ValidationError chained to the cause.
- Defaults are stored as declared: they bypass both rule and mapper.

Introspection & representation
- OptionType metaclass exposes every field listed in __introspectable__ as a
  read-only property (mirrored from the private "_field" attribute) and provides
  stable __repr__/__rich_repr__ implementations. Mutation only goes through the
  set_*/add_alias methods used by the builder and the parser.

Quick example:
    >>> option = Option("count").set_rule(str.isalpha).set_mapper(str.upper)
    >>> option.set_value("abc").value
    'ABC'
"""
import functools
import operator
import re
from enum import Enum

from .faults import ValidationError
from .utils import *

_identifier = re.compile(r"[a-z][a-z0-9_]*", re.IGNORECASE)


class OptionKind(Enum):
    NAMED = "option"
    POSITIONAL = "argument"

    @property
    def label(self):
        return self.value


class OptionType(type):
    """
    Metaclass that turns option records into introspectable objects.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics (rich.pretty friendly).

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(name='verbose', aliases={'v'}, kind=<OptionKind.NAMED: 'option'>, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _check_name(name, /):
    """
    Internal: validate an option name or alias.

    Strings must follow the token grammar so that they can be reached from the
    command line; integers are positional indices and must be non-negative.
    """
    if isinstance(name, bool) or not isinstance(name, str | int):
        raise TypeError("option name must be a string or an integer")
    if isinstance(name, int) and name < 0:
        raise ValueError("option index must be a non-negative integer")
    if isinstance(name, str) and not _identifier.fullmatch(name):
        raise ValueError("option name %r must be a letter followed by letters, digits or underscores" % name)
    return name


class Option(metaclass=OptionType):
    """
    A declared named option or positional argument and its resolved value.

    Properties
    - The names listed in __introspectable__ are exposed as read-only
      attributes mirroring the private fields.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "kind",
        "boolean",
        "required",
        "descr",
        "rule",
        "mapper",
        "default",
        "value",
    )

    __displayable__ = (
        "name",
        "aliases",
        "kind",
        "boolean",
        "required",
        "descr",
        "value",
    )

    def __init__(self, name, /):
        self._name = _check_name(name)
        self._aliases = set()
        self._kind = OptionKind.NAMED if isinstance(name, str) else OptionKind.POSITIONAL
        self._boolean = False
        self._required = False
        self._descr = None
        self._rule = None
        self._mapper = None
        self._default = Unset
        self._value = None

    @property
    def label(self):
        """
        Human wording of the option for messages, e.g. "option 'username'" or "argument 0".
        """
        if self._kind is OptionKind.NAMED:
            return "%s %r" % (self._kind.label, self._name)
        return "%s %d" % (self._kind.label, self._name)

    @property
    def names(self):
        """Primary name followed by the aliases in sorted order."""
        return (self._name, *sorted(self._aliases))

    def has_default(self):
        return self._default is not Unset

    def set_boolean(self, boolean=True, /):
        self._boolean = bool(boolean)
        return self

    def set_required(self, required=True, /):
        self._required = bool(required)
        return self

    def add_alias(self, alias, /):
        if not isinstance(_check_name(alias), str):
            raise TypeError("option alias must be a string")
        if alias == self._name:
            raise ValueError("option alias %r cannot repeat the option name" % alias)
        self._aliases.add(alias)
        return self

    def set_descr(self, descr, /):
        if not isinstance(descr, str):
            raise TypeError("option description must be a string")
        elif not (descr := descr.strip()):
            raise ValueError("option description cannot be empty")
        self._descr = descr
        return self

    def set_rule(self, rule, /):
        if not callable(rule):
            raise TypeError("option rule must be callable")
        self._rule = rule
        return self

    def set_mapper(self, mapper, /):
        if not callable(mapper):
            raise TypeError("option mapper must be callable")
        self._mapper = mapper
        return self

    def set_default(self, default, /):
        self._default = default
        return self

    def set_value(self, value, /):
        """
        Run a raw value through the pipeline and store the result.

        raises
        - ValidationError when the rule rejects the value (the mapper is not called),
          or when the rule or the mapper itself fails; the failure is chained.
        """
        if value is None:
            self._value = None
            return self

        try:
            accepted = self._rule is None or self._rule(value)
        except Exception as error:
            raise ValidationError(
                "invalid value %r for %s: %s" % (value, self.label, error),
                name=self._name,
                value=value,
            ) from error

        if not accepted:
            raise ValidationError(
                "invalid value %r for %s" % (value, self.label),
                name=self._name,
                value=value,
            )

        try:
            self._value = self._mapper(value) if self._mapper is not None else value
        except Exception as error:
            raise ValidationError(
                "unable to map value %r for %s: %s" % (value, self.label, error),
                name=self._name,
                value=value,
            ) from error
        return self

    def apply_default(self):
        """
        Fill an unset value with the declared default (if any), as-is.
        """
        if self._value is None and self._default is not Unset:
            self._value = self._default
        return self

    def reset(self):
        self._value = None
        return self


__all__ = (
    "Option",
    "OptionKind",
)

# Keep the metaclass out of star-imports and docs; it is not part of the public API.
del OptionType
