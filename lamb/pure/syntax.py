"""Concrete syntax tree and recursive-descent parser for lamb.

The grammar is followed literally, and every nonterminal becomes its own node type:

```
<program>     ::= <exprList>
<exprList>    ::= <expr> <optExprList>
<optExprList> ::= ε | <exprList>                   ; ε exactly when no <expr> can start here
<expr>        ::= <atom> | <invocation> | <let> | <define> | <lambda>
<let>         ::= LET "(" NAME <expr> ")" <expr>
<define>      ::= DEFINE NAME <expr>
<lambda>      ::= LAMBDA "(" NAME ")" <expr>
<atom>        ::= NAME | STRING | <number>
<number>      ::= INT | FLOAT
<invocation>  ::= "(" <exprList> ")"
```

The parser looks at one token at a time and never backtracks: the first token of an <expr> decides which alternative
is parsed, in the order atom, invocation, let, define, and otherwise lambda.
"""

from abc import ABC
from dataclasses import dataclass, fields
from typing import Iterator, List, Optional, Union

from lamb.lang.error import InvalidTokenError, UnexpectedTokenError
from lamb.pure.lexical import Token, TokenKind, lex


class SyntaxNode(ABC):
    """Superclass of every syntax tree node. Children (tokens and nodes) are stored in grammar order."""

    @property
    def children(self):
        """Tokens and nodes of this node, in the order they appear in the grammar. Absent (ε) parts are skipped."""
        return [getattr(self, field.name) for field in fields(self) if getattr(self, field.name) is not None]

    def tokens(self) -> Iterator[Token]:
        """Every token under this node, left to right."""
        stack = [self]
        while stack:
            child = stack.pop()
            if isinstance(child, Token):
                yield child
            else:
                stack.extend(reversed(child.children))

    @property
    def text(self):
        """Source-like rendering of this node, used in messages."""
        result = ""
        for token in self.tokens():
            if result and not result.endswith("(") and token.kind is not TokenKind.CPAREN:
                result += " "
            result += token.text
        return result

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <node>(
            <node>(
                ...
                Token(<KIND>, <literal>)
            )
        )
        """
        result = f"{'    ' * indents}{type(self).__name__}("
        for child in self.children:
            if isinstance(child, Token):
                result += f"\n{'    ' * (indents + 1)}{child!r}"
            else:
                result += "\n" + child.display(indents + 1)
        return result + f"\n{'    ' * indents})"

    def __str__(self):
        return self.display()


@dataclass(frozen=True)
class Number(SyntaxNode):
    token: Token  # INT or FLOAT


@dataclass(frozen=True)
class Atom(SyntaxNode):
    value: Union[Token, Number]  # NAME or STRING token, or a Number


@dataclass(frozen=True)
class Let(SyntaxNode):
    keyword: Token
    oparen: Token
    name: Token
    value: "Expr"
    cparen: Token
    body: "Expr"


@dataclass(frozen=True)
class Define(SyntaxNode):
    keyword: Token
    name: Token
    value: "Expr"


@dataclass(frozen=True)
class Lambda(SyntaxNode):
    keyword: Token
    oparen: Token
    parameter: Token
    cparen: Token
    body: "Expr"


@dataclass(frozen=True)
class Invocation(SyntaxNode):
    oparen: Token
    exprs: "ExprList"
    cparen: Token


@dataclass(frozen=True)
class Expr(SyntaxNode):
    form: Union[Atom, Invocation, Let, Define, Lambda]


@dataclass(frozen=True)
class OptExprList(SyntaxNode):
    exprs: Optional["ExprList"] = None  # None is ε

    @property
    def is_epsilon(self):
        return self.exprs is None


@dataclass(frozen=True)
class ExprList(SyntaxNode):
    expr: Expr
    rest: OptExprList

    def __iter__(self):
        """Iterates over the exprs of this list and of every nested optExprList."""
        node = self
        while node is not None:
            yield node.expr
            node = node.rest.exprs


@dataclass(frozen=True)
class Program(SyntaxNode):
    exprs: ExprList


class Parser:
    """One-token-lookahead recursive-descent parser. A Parser owns its token list and cursor, so it parses one source
    and is then thrown away.
    """
    ATOMS = (TokenKind.NAME, TokenKind.STRING, TokenKind.INT, TokenKind.FLOAT)
    NUMBERS = (TokenKind.INT, TokenKind.FLOAT)
    EXPR_STARTS = ATOMS + (TokenKind.OPAREN, TokenKind.LET, TokenKind.DEFINE, TokenKind.LAMBDA)

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[Token]:
        """Next unconsumed token, or None if the tokens are exhausted. An INVALID token is raised as soon as it is
        looked at, since nothing can follow it.
        """
        if self.pos >= len(self.tokens):
            return None

        token = self.tokens[self.pos]
        if token.kind is TokenKind.INVALID:
            raise InvalidTokenError(token.literal)
        return token

    def pending(self, *kinds):
        """Whether the next token is one of kinds."""
        token = self.peek()
        return token is not None and token.kind in kinds

    def consume(self, kind) -> Token:
        """Removes and returns the next token, which must be of kind."""
        token = self.peek()
        if token is None or token.kind is not kind:
            raise UnexpectedTokenError(kind, token)

        self.pos += 1
        return token

    def parse(self) -> Program:
        """Parses the whole token list as a program. Tokens left over after the program are an error."""
        program = self.program()

        leftover = self.peek()
        if leftover is not None:
            raise UnexpectedTokenError("end of input", leftover)
        return program

    def program(self):
        return Program(self.expr_list())

    def expr_list(self):
        """Parses exprs until none can start, then nests them right to left, ending in an ε optExprList."""
        exprs = [self.expr()]
        while self.pending(*Parser.EXPR_STARTS):
            exprs.append(self.expr())

        rest = OptExprList()
        for expr in reversed(exprs[1:]):
            rest = OptExprList(ExprList(expr, rest))
        return ExprList(exprs[0], rest)

    def expr(self):
        if self.pending(*Parser.ATOMS):
            return Expr(self.atom())
        elif self.pending(TokenKind.OPAREN):
            return Expr(self.invocation())
        elif self.pending(TokenKind.LET):
            return Expr(self.let())
        elif self.pending(TokenKind.DEFINE):
            return Expr(self.define())
        return Expr(self.lambda_())  # unguarded: a bad token fails on consume(LAMBDA)

    def let(self):
        keyword = self.consume(TokenKind.LET)
        oparen = self.consume(TokenKind.OPAREN)
        name = self.consume(TokenKind.NAME)
        value = self.expr()
        cparen = self.consume(TokenKind.CPAREN)
        return Let(keyword, oparen, name, value, cparen, self.expr())

    def define(self):
        keyword = self.consume(TokenKind.DEFINE)
        name = self.consume(TokenKind.NAME)
        return Define(keyword, name, self.expr())

    def lambda_(self):
        keyword = self.consume(TokenKind.LAMBDA)
        oparen = self.consume(TokenKind.OPAREN)
        parameter = self.consume(TokenKind.NAME)
        cparen = self.consume(TokenKind.CPAREN)
        return Lambda(keyword, oparen, parameter, cparen, self.expr())

    def atom(self):
        if self.pending(*Parser.NUMBERS):
            return Atom(self.number())
        elif self.pending(TokenKind.STRING):
            return Atom(self.consume(TokenKind.STRING))
        return Atom(self.consume(TokenKind.NAME))

    def number(self):
        if self.pending(TokenKind.INT):
            return Number(self.consume(TokenKind.INT))
        return Number(self.consume(TokenKind.FLOAT))

    def invocation(self):
        oparen = self.consume(TokenKind.OPAREN)
        exprs = self.expr_list()
        return Invocation(oparen, exprs, self.consume(TokenKind.CPAREN))


def parse(source: str) -> Program:
    """Lexes and parses source into a Program. Raises InvalidTokenError or UnexpectedTokenError."""
    return Parser(lex(source)).parse()
