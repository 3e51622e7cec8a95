"""
Commando command layer: declare options fluently, parse lazily, read values.

What this module provides
- Command: owns the option registry and the invocation tokens, and is the
  caller-facing boundary:
  • declaration: option(...) plus the configuration verbs, chained;
  • parsing: parse() runs one pass (see commando.parsing) and is idempotent;
  • reading: command[key] parses on first access, then returns the resolved value;
  • surfacing: parse faults are trapped (printed, exit 1) or propagated, and a
    help request prints the help and exits 0.
- OptionBuilder: the handle returned by option(...). Its verbs configure the option it
  is bound to and return the handle itself, so declarations read as one chain.

Verbs and their spellings
- boolean / bool / b           presence alone sets True
- require / required / r       must be supplied
- alias / aka / a              extra key for the same option
- describe / d / description / described_as
- map / map_to / cast / cast_with
- must                         validation rule
- default / defaults_to        value used when not supplied

Quick start
    from commando import Command

    command = Command(["prog", "-u", "nate", "--verbose", "extra"])
    command.option("u").alias("username").describe("who to greet")
    command.option("verbose").boolean()

    command["username"]  # "nate" (parses now)
    command["verbose"]   # True
    command[0]           # "extra"

Declaration rules
- Verbs called on the command apply to the option selected by the last option(...)
  call; before any such call they raise ChainError.
- Any other public name used as a verb raises UnknownFunctionError.
- Once a parse has completed, declaring, reopening or configuring options raises
  LockedCommandError until set_tokens(...) starts over.
"""
import io
import logging
import sys
from collections.abc import Iterable

from rich.console import Console

from . import parsing, rendering
from .faults import *
from .options import Option, _check_name
from .registry import OptionRegistry
from .utils import *

logger = logging.getLogger(__name__)


class Chainable:
    """
    Configuration verbs shared by Command and OptionBuilder.

    Subclasses provide _chain() (the option a verb applies to) and _owner
    (the command whose registry holds it). Every verb returns self.
    """

    def _chain(self):
        raise NotImplementedError

    @property
    def _owner(self):
        raise NotImplementedError

    def __getattr__(self, name):
        # Only reached when regular lookup failed.
        if name.startswith("_"):
            raise AttributeError("%r object has no attribute %r" % (type(self).__name__, name))
        raise UnknownFunctionError("unknown function %r called" % name, name=name)

    def boolean(self, boolean=True, /):
        self._chain().set_boolean(boolean)
        return self

    def require(self, require=True, /):
        self._chain().set_required(require)
        return self

    def alias(self, alias, /):
        self._owner._registry.alias(alias, self._chain())
        return self

    def describe(self, descr, /):
        self._chain().set_descr(descr)
        return self

    def map(self, mapper, /):
        self._chain().set_mapper(mapper)
        return self

    def must(self, rule, /):
        self._chain().set_rule(rule)
        return self

    def default(self, default, /):
        self._chain().set_default(default)
        return self

    bool = b = boolean
    required = r = require
    aka = a = alias
    d = description = described_as = describe
    map_to = cast = cast_with = map
    defaults_to = default


class OptionBuilder(Chainable):
    """
    Handle on one declared option.

    Verbs configure the bound option and return the handle. option(...) moves on
    to the next declaration; the read interface and parse() are forwarded to the
    command so a chain can end with a lookup.
    """

    def __init__(self, command, option, /):
        self._command = command
        self._option = option

    @property
    def command(self):
        return self._command

    @property
    def target(self):
        return self._option

    @property
    def _owner(self):
        return self._command

    def _chain(self):
        self._command._unlocked()
        return self._option

    def option(self, name=Unset, /):
        return self._command.option(name)

    o = option

    def parse(self):
        return self._command.parse()

    def __getitem__(self, key):
        return self._command[key]

    def __setitem__(self, key, value):
        self._command[key] = value

    def __delitem__(self, key):
        del self._command[key]

    def __contains__(self, key):
        return key in self._command

    def __iter__(self):
        return iter(self._command)

    def __repr__(self):
        return "option-builder(%r)" % (self._option,)


class Command(Chainable):
    """
    Option declarations, invocation tokens and resolved values of one program.

    Runtime flags (keyword-only, Unset means "use the default")
    - trap: print parse faults as "ERROR: ..." on stderr and exit 1 (default True);
      when False the fault is raised to the caller.
    - default_help: reserve '-help'/'--help' and add a 'help' entry to the listing
      (default True).
    - colorful: style help and errors (default True).
    - width: help width in columns (default: detected console width).

    Host hooks (looked up in __main__)
    - __prog__: program name shown in the help header instead of argv[0].
    - __styles__: palette overrides for help and error rendering.
    """

    def __init__(self, tokens=Unset, /, *, trap=Unset, default_help=Unset, colorful=Unset, width=Unset):
        if not isinstance(width, int | Unset) or isinstance(width, bool):
            raise TypeError("command 'width' must be an integer")
        elif isinstance(width, int) and width < 1:
            raise ValueError("command 'width' must be a positive integer")

        self._registry = OptionRegistry()
        self._current = Unset
        self._name = None
        self._help = None
        self._parsed = False
        self._trap = bool(coalesce(trap, True))
        self._default_help = bool(coalesce(default_help, True))
        self._colorful = bool(coalesce(colorful, True))
        self._width = coalesce(width)
        self._tokens = []
        self.set_tokens(coalesce(tokens, sys.argv))
        if not self._tokens:
            # an empty invocation falls back to the process arguments
            self._tokens = list(sys.argv)

    @classmethod
    def define(cls, tokens=Unset, /, **options):
        """
        Factory spelling that reads a little nicer: Command.define(argv).option(...)...
        """
        return cls(tokens, **options)

    # ── Introspection ───────────────────────────────────────────────────────

    @property
    def name(self):
        """
        Program name: __prog__ from __main__, else the first token.
        """
        fallback = self._name or (self._tokens[0] if self._tokens else None)
        return getattr(__import__("__main__"), "__prog__", fallback)

    @property
    def parsed(self):
        return self._parsed

    @property
    def options(self):
        """Distinct options in declaration order."""
        return tuple(self._registry)

    @property
    def size(self):
        return len(self._registry)

    @property
    def trap(self):
        return self._trap

    @property
    def colorful(self):
        return self._colorful

    def has_option(self, key, /):
        return key in self._registry

    def get_option(self, key, /):
        try:
            return self._registry.get(key)
        except KeyError:
            raise UnknownOptionError("unknown option %r specified" % (key,), input=key) from None

    # ── Configuration ───────────────────────────────────────────────────────

    def set_tokens(self, tokens, /):
        """
        Replace the invocation tokens (argv-like, program name first).

        The next read parses again; declarations are unlocked until then.
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("command tokens must be an iterable of strings")
        self._tokens = list(tokens)
        self._parsed = False
        return self

    def set_help(self, help, /):
        """
        Free text shown between the header and the option listing.
        """
        if not isinstance(help, str):
            raise TypeError("command help must be a string")
        self._help = help.strip() or None
        return self

    def use_default_help(self, help=True, /):
        self._default_help = bool(help)
        return self

    def trap_errors(self, trap=True, /):
        self._trap = bool(trap)
        return self

    def do_not_trap_errors(self):
        return self.trap_errors(False)

    # ── Declaration ─────────────────────────────────────────────────────────

    def option(self, name=Unset, /):
        """
        Declare a new option, or reopen a declared one, and make it current.

        - no name: the next anonymous positional index (0, 1, ...).
        - a registered name (or alias, or index): the existing option.
        - any other name: a new named option (or positional, for an integer).
        """
        self._unlocked()

        if name is Unset:
            option = self._registry.add(Option(self._registry.allocate()))
        elif _check_name(name) in self._registry:
            option = self._registry.get(name)
        else:
            option = self._registry.add(Option(name))

        logger.debug("declaring %s", option.label)
        self._current = OptionBuilder(self, option)
        return self._current

    o = option

    @property
    def _owner(self):
        return self

    def _chain(self):
        if self._current is Unset:
            raise ChainError("invalid option chain: attempting to configure an option before an 'option' declaration")
        return self._current._chain()

    def _unlocked(self):
        if self._parsed:
            raise LockedCommandError("options cannot be declared or configured once the command has been parsed")

    # ── Parsing ─────────────────────────────────────────────────────────────

    def parse(self):
        """
        Run the parse pass once; later calls are no-ops until set_tokens(...).
        """
        if self._parsed:
            return self

        try:
            self._name = parsing.parse(self._registry, self._tokens, default_help=self._default_help)
        except HelpRequested as request:
            trigger(request, tool=self)
        except CommandException as fault:
            self.trigger(fault)
        else:
            self._parsed = True
            logger.debug("parsed %d token(s) into %d option(s)", max(len(self._tokens) - 1, 0), len(self.options))
        return self

    def trigger(self, fault, /, **options):
        """
        Surface a parse fault according to the trap policy of this command.
        """
        logger.debug("parse fault %s: %s", fault.code.normalize(), fault.message)
        trigger(fault, **options, tool=self, trap=self._trap, colorful=self._colorful)

    # ── Read interface ──────────────────────────────────────────────────────

    def __getitem__(self, key):
        self.parse()
        option = self._registry.get(key, None)
        return option.value if option is not None else None

    def __setitem__(self, key, value):
        raise ForbiddenWriteError("setting an option value via item assignment is not permitted", name=key)

    def __delitem__(self, key):
        self.parse()
        self._registry.get(key).reset()

    def __contains__(self, key):
        return key in self._registry

    def __iter__(self):
        return iter(self._registry.keys())

    def __len__(self):
        return len(self._registry)

    # ── Help ────────────────────────────────────────────────────────────────

    def _attach_help(self):
        if not self._default_help or "help" in self._registry:
            return
        # Internal registration: allowed after parsing, and leaves the current option alone.
        self._registry.add(Option("help").set_descr("Show the help page for this command.").set_boolean())

    def _render(self):
        self._attach_help()
        return rendering.render(self.name, self._help, self._registry, colorful=self._colorful)

    def get_help(self):
        console = Console(
            file=io.StringIO(),
            width=self._width or Console().width,
            force_terminal=self._colorful,
            color_system="auto" if self._colorful else None,
            highlight=False,
        )
        console.print(self._render())
        return console.file.getvalue()

    def print_help(self):
        Console(width=self._width, highlight=False, no_color=not self._colorful).print(self._render())

    def __str__(self):
        return self.get_help()

    def __rich_repr__(self):
        yield "name", self.name
        yield "parsed", self._parsed
        yield "options", self.options

    def __repr__(self):
        return "command(name=%r, parsed=%r, options=%r)" % (self.name, self._parsed, self.options)


__all__ = (
    "Command",
    "OptionBuilder",
)
