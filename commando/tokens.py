r"""
Commando tokenizer.

Classifies one raw invocation token into a (name, kind) pair:

    "nate"        -> ("nate", TokenKind.ARGUMENT)
    "-u"          -> ("u", TokenKind.SHORT)
    "--username"  -> ("username", TokenKind.VERBOSE)

Grammar (whole token, case-insensitive): (--?)?[a-z][a-z0-9_]*
Anything else is a MalformedTokenError naming the token.

Whether a named token carries a value is not decided here; the parse pass
looks at the matching option's boolean marker for that.
"""
import re
from enum import IntEnum

from .faults import MalformedTokenError
from .utils import Unset, ordinal

_grammar = re.compile(r"(?P<hyphens>--?)?(?P<name>[a-z][a-z0-9_]*)", re.IGNORECASE)


class TokenKind(IntEnum):
    ARGUMENT = 1  # e.g. foo
    SHORT = 2     # e.g. -u
    VERBOSE = 4   # e.g. --username


def tokenize(token, /, index=Unset):
    """
    split a raw token into its name and kind.

    parameters
    - token: str, one element of the invocation token list.
    - index: 1-based position of the token, used only to word the error.

    raises
    - TypeError when the token is not a string.
    - MalformedTokenError when the token does not follow the grammar.
    """
    if not isinstance(token, str):
        raise TypeError("tokenize() argument must be a string")

    if not (matched := _grammar.fullmatch(token)):
        if index is Unset:
            message = "unable to parse %r: invalid syntax" % token
        else:
            message = "unable to parse %r at %s position: invalid syntax" % (token, ordinal(index))
        raise MalformedTokenError(message, token=token)

    match matched["hyphens"]:
        case None:
            kind = TokenKind.ARGUMENT
        case "-":
            kind = TokenKind.SHORT
        case _:
            kind = TokenKind.VERBOSE

    return matched["name"], kind


__all__ = (
    "TokenKind",
    "tokenize",
)
