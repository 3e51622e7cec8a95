"""
Tokenizer behavioral tests.

Scope
- Classify plain, short and verbose tokens.
- Reject tokens outside the grammar with a MalformedTokenError naming them.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commando import MalformedTokenError, TokenKind, tokenize


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def testPlainTokenIsArgument(self):
        self.assertEqual(tokenize("nate"), ("nate", TokenKind.ARGUMENT))

    def testSingleHyphenIsShort(self):
        self.assertEqual(tokenize("-u"), ("u", TokenKind.SHORT))

    def testLongNameWithSingleHyphenIsStillShort(self):
        self.assertEqual(tokenize("-user"), ("user", TokenKind.SHORT))

    def testDoubleHyphenIsVerbose(self):
        self.assertEqual(tokenize("--username"), ("username", TokenKind.VERBOSE))

    def testCaseIsPreserved(self):
        self.assertEqual(tokenize("--Dry_Run2"), ("Dry_Run2", TokenKind.VERBOSE))

    def testKindValues(self):
        self.assertEqual(int(TokenKind.ARGUMENT), 1)
        self.assertEqual(int(TokenKind.SHORT), 2)
        self.assertEqual(int(TokenKind.VERBOSE), 4)

    def testMalformedTokensRaise(self):
        for token in ("", "-", "--", "---name", "5", "_name", "file.txt", "--dry-run", "-u=nate", "two words"):
            with self.subTest(token=token), self.assertRaises(MalformedTokenError) as context:
                tokenize(token)
            self.assertEqual(context.exception.token, token)
            self.assertIn(repr(token), context.exception.message)

    def testMalformedTokenMentionsPosition(self):
        with self.assertRaises(MalformedTokenError) as context:
            tokenize("42", 3)
        self.assertIn("third position", context.exception.message)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            tokenize(None)


if __name__ == "__main__":
    unittest.main()
