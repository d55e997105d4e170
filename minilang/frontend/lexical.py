"""Lexical analysis for minilang. Turns raw source text into a flat list of Tokens, terminated by an EOF token.

The lexical grammar is deliberately tiny:

```
<token>      ::= "(" | ")" | "{" | "}" | "[" | "]" | "," | "." | ":" | ";" | "="
               | "+" | "-" | "*" | "/" | "%"              ; BINARY_OPERATOR
               | <digit>+                                  ; NUMBER, kept as text until parsing
               | <letter>+                                 ; IDENTIFIER, or LET/CONST if reserved
<whitespace> ::= " " | "\t" | "\n" | "\r"                  ; skipped
```

There are no string literals, comments, decimal points or negative literals. Anything else is a LexError.
"""

from dataclasses import dataclass, field
from enum import Enum

from minilang.lang.error import LexError


class TokenType(Enum):
    # literals
    NUMBER = "Number"
    IDENTIFIER = "Identifier"

    # keywords
    LET = "Let"
    CONST = "Const"

    # grouping and operators
    BINARY_OPERATOR = "BinaryOperator"
    EQUALS = "Equals"
    COMMA = "Comma"
    DOT = "Dot"
    COLON = "Colon"
    SEMICOLON = "Semicolon"
    OPEN_PAREN = "OpenParen"
    CLOSE_PAREN = "CloseParen"
    OPEN_BRACE = "OpenBrace"
    CLOSE_BRACE = "CloseBrace"
    OPEN_BRACKET = "OpenBracket"
    CLOSE_BRACKET = "CloseBracket"

    EOF = "EOF"  # end of file


KEYWORDS = {
    "let": TokenType.LET,
    "const": TokenType.CONST,
}

SINGLE_CHARS = {
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "{": TokenType.OPEN_BRACE,
    "}": TokenType.CLOSE_BRACE,
    "[": TokenType.OPEN_BRACKET,
    "]": TokenType.CLOSE_BRACKET,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "+": TokenType.BINARY_OPERATOR,
    "-": TokenType.BINARY_OPERATOR,
    "*": TokenType.BINARY_OPERATOR,
    "/": TokenType.BINARY_OPERATOR,
    "%": TokenType.BINARY_OPERATOR,
    "=": TokenType.EQUALS,
}

SKIPPABLE = (" ", "\t", "\n", "\r")

EOF_VALUE = "EndOfFile"


@dataclass
class Token:
    """A lexeme and its kind. Position (1-based line, 0-based column) is only kept for error messages."""
    type: TokenType
    value: str
    line: int = field(default=1, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self):
        return f"{self.type.value}({self.value!r})"


def is_digit(char):
    return "0" <= char <= "9"


def is_alpha(char):
    """Letters are characters with distinct upper and lower case forms."""
    return char.upper() != char.lower()


class Lexer:
    """Single left-to-right pass over source text. Only multi-character runs (numbers and words) look further ahead than
    the current character.
    """

    def __init__(self, source):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 0

    @property
    def char(self):
        return self.source[self.pos]

    def at_end(self):
        return self.pos >= len(self.source)

    def advance(self):
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return char

    def read_run(self, predicate):
        """Consumes and returns the maximal run of characters satisfying predicate."""
        start = self.pos
        while not self.at_end() and predicate(self.char):
            self.advance()
        return self.source[start:self.pos]

    def tokenize(self):
        tokens = []

        while not self.at_end():
            line, column = self.line, self.column
            char = self.char

            if char in SINGLE_CHARS:
                tokens.append(Token(SINGLE_CHARS[char], self.advance(), line, column))

            elif is_digit(char):
                tokens.append(Token(TokenType.NUMBER, self.read_run(is_digit), line, column))

            elif is_alpha(char):
                word = self.read_run(is_alpha)
                tokens.append(Token(KEYWORDS.get(word, TokenType.IDENTIFIER), word, line, column))

            elif char in SKIPPABLE:
                self.advance()

            else:
                raise LexError("unrecognized character '{}' found in source", char, line_num=line, start=column)

        tokens.append(Token(TokenType.EOF, EOF_VALUE, self.line, self.column))
        return tokens


def tokenize(source):
    """Returns the list of Tokens in source, ending with an EOF Token. Raises LexError on the first bad character."""
    return Lexer(source).tokenize()
