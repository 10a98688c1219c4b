"""Lexical analysis for lamb: turns source text into an ordered list of Tokens.

Lexical token classes can be loosely defined as follows:

```
<whitespace>    ::= (" " | "\t" | "\n" | ...)+           ; discarded
<line_comment>  ::= ";;" <char>*                         ; discarded, runs to end of line
<block_comment> ::= ";*" <char>* "*;"                    ; discarded, may span lines
<oparen>        ::= "("
<cparen>        ::= ")"
<int>           ::= "-"? <digit>+
<float>         ::= "-"? <digit>+ "." <digit>* <exponent>?
                  | "-"? "." <digit>+ <exponent>?
                  | "-"? <digit>+ <exponent>
<string>        ::= '"' <char except '"'>* '"'           ; no escapes
<name>          ::= <initial> <subsequent>*              ; "let", "define", "lambda" (any case) are keywords
```

At every position, each rule in RULES is tried against the start of the remaining text. The longest match wins, and a
tie goes to the rule listed first. If nothing matches, the whole remainder becomes one INVALID token and lexing stops.
"""

from dataclasses import dataclass
from enum import Enum
import re
from typing import Any, Callable, List, NamedTuple, Optional


class TokenKind(Enum):
    OPAREN = "("
    CPAREN = ")"
    NAME = "NAME"
    STRING = "STRING"
    INT = "INT"
    FLOAT = "FLOAT"
    LET = "LET"
    DEFINE = "DEFINE"
    LAMBDA = "LAMBDA"
    INVALID = "INVALID"

    def __str__(self):
        return self.value


KEYWORDS = {"let": TokenKind.LET, "define": TokenKind.DEFINE, "lambda": TokenKind.LAMBDA}


@dataclass(frozen=True)
class Token:
    """Smallest lexical unit. literal is the decoded payload (symbol, string, number, or the INVALID remainder) and is
    None for parentheses and keywords. text is the exact source text the token was built from.
    """
    kind: TokenKind
    literal: Any = None
    text: str = ""

    def __repr__(self):
        if self.literal is None:
            return f"Token({self.kind.name})"
        return f"Token({self.kind.name}, {self.literal!r})"


class Rule(NamedTuple):
    """A lexical rule: an anchored pattern and the function that turns its match into a Token (None to discard)."""
    name: str
    pattern: "re.Pattern"
    build: Optional[Callable[[str], Token]]


def _name(text):
    keyword = KEYWORDS.get(text.lower())
    if keyword is not None:
        return Token(keyword, text=text)
    return Token(TokenKind.NAME, text, text)


_INITIAL = r"A-Za-z!$%&*/:<=>?^_~+\-"
_EXPONENT = r"(?:[eE][-+]?\d+)"

# order matters: on equal-length matches the earlier rule wins
RULES = [
    Rule("whitespace", re.compile(r"\s+"), None),
    Rule("line_comment", re.compile(r";;[^\n]*"), None),
    Rule("block_comment", re.compile(r";\*.*?\*;", re.DOTALL), None),
    Rule("oparen", re.compile(r"\("), lambda text: Token(TokenKind.OPAREN, text=text)),
    Rule("cparen", re.compile(r"\)"), lambda text: Token(TokenKind.CPAREN, text=text)),
    Rule("int", re.compile(r"-?\d+"), lambda text: Token(TokenKind.INT, int(text), text)),
    Rule("float", re.compile(rf"-?(?:\d+\.\d*{_EXPONENT}?|\.\d+{_EXPONENT}?|\d+{_EXPONENT})"),
         lambda text: Token(TokenKind.FLOAT, float(text), text)),
    Rule("string", re.compile(r'"[^"]*"'), lambda text: Token(TokenKind.STRING, text[1:-1], text)),
    Rule("name", re.compile(rf"[{_INITIAL}][{_INITIAL}0-9]*"), _name),
]


def longest_match(source, pos=0):
    """Returns (rule, matched text) for the longest rule match at pos, ties going to the earliest rule. Returns
    (None, "") if no rule matches.
    """
    best_rule, best_text = None, ""
    for rule in RULES:
        match = rule.pattern.match(source, pos)
        if match and len(match.group()) > len(best_text):
            best_rule, best_text = rule, match.group()
    return best_rule, best_text


def lex(source: str) -> List[Token]:
    """Converts source into tokens. Never raises: unlexable input ends the list with an INVALID token."""
    tokens = []
    pos = 0

    while pos < len(source):
        rule, text = longest_match(source, pos)
        if rule is None:
            tokens.append(Token(TokenKind.INVALID, source[pos:], source[pos:]))
            break

        if rule.build is not None:
            try:
                tokens.append(rule.build(text))
            except ValueError:  # integer literal longer than the interpreter will convert
                tokens.append(Token(TokenKind.INVALID, source[pos:], source[pos:]))
                break
        pos += len(text)

    return tokens
