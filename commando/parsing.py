"""
Commando parse pass.

parse(registry, tokens) walks an argv-like token list once and binds values into
the options of the registry.

phases
- setup
  • reset every option value; copy the tokens into a deque; drop the program name.
- loop (consuming)
  • classify each token with tokenize().
  • ARGUMENT tokens bind to the next positional index (0, 1, ...), independently of
    interleaved named tokens; undeclared indices get a bare option on the fly.
  • SHORT/VERBOSE tokens:
      – the reserved 'help' name raises HelpRequested at once when default help is on;
      – unknown names raise UnknownOptionError;
      – boolean options bind True and consume nothing else;
      – valued options consume the next token, which must be an ARGUMENT.
- binding (validating)
  • every pending (option, raw) pair goes through Option.set_value(): rule, then mapper.
    pairs are keyed by option identity, so an option reached through an alias and
    through its name is set once (last occurrence wins).
- sweep
  • defaults are applied, then each distinct option that is required and still
    unset raises MissingRequiredError.

Faults are raised, never printed: deciding whether to trap them or to end the
process belongs to the command (see commando.commands).
"""
import logging
from collections import deque

from .faults import *
from .options import Option
from .tokens import TokenKind, tokenize
from .utils import ordinal

logger = logging.getLogger(__name__)


def _bind(pending, option, value):
    # re-inserting moves the option to the end so binding follows the last occurrence
    pending.pop(option, None)
    pending[option] = value


def parse(registry, tokens, /, *, default_help=True):
    """
    run one parse pass and return the program name (None for an empty token list).

    parameters
    - registry: OptionRegistry holding the declared options.
    - tokens: iterable of str; element 0 is the program name.
    - default_help: when True, '-help'/'--help' raises HelpRequested.

    raises
    - MalformedTokenError, UnknownOptionError, ExpectedArgumentError,
      ValidationError, MissingRequiredError, HelpRequested.
    """
    for option in registry:
        option.reset()

    tokens = deque(tokens)
    name = tokens.popleft() if tokens else None

    pending = {}
    count = 0  # positional argument counter
    index = 0  # 1-based position of the token being read, for messages

    while tokens:
        token = tokens.popleft()
        index += 1
        input, kind = tokenize(token, index)
        logger.debug("token %r at %s position classified as %s", token, ordinal(index), kind.name)

        if kind is TokenKind.ARGUMENT:
            if count not in registry:
                registry.add(Option(count))
                logger.debug("registered undeclared argument %d", count)
            _bind(pending, registry.get(count), input)
            count += 1
            continue

        if default_help and input == "help":
            logger.debug("help requested at %s position", ordinal(index))
            raise HelpRequested()

        try:
            option = registry.get(input)
        except KeyError:
            raise UnknownOptionError(
                "unknown option %r specified at %s position" % (input, ordinal(index)),
                input=input,
                index=index,
            ) from None

        if option.boolean:
            _bind(pending, option, True)
            continue

        # the next token MUST be an argument and not another flag/option
        if not tokens:
            raise ExpectedArgumentError(
                "unable to parse option %r at %s position: expected an argument" % (token, ordinal(index)),
                input=input,
                index=index,
            )
        index += 1
        value, kind = tokenize(tokens.popleft(), index)
        if kind is not TokenKind.ARGUMENT:
            raise ExpectedArgumentError(
                "unable to parse option %r at %s position: expected an argument" % (token, ordinal(index - 1)),
                input=input,
                index=index - 1,
            )
        _bind(pending, option, value)

    for option, value in pending.items():
        logger.debug("binding %r to %s", value, option.label)
        option.set_value(value)

    for option in registry:
        option.apply_default()
        if option.value is None and option.required:
            raise MissingRequiredError(
                "required %s must be specified" % option.label,
                name=option.name,
                kind=option.kind.label,
            )

    return name


__all__ = (
    "parse",
)
