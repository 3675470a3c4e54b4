import enum
from dataclasses import dataclass
from typing import Optional

from calculator.tokenizer import Token, TokenType, untokenize
from calculator.utils import CalculatorError, PrintableEnum


@dataclass
class ParserError(CalculatorError):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        parsed_tokens = self.tokens[: self.error_token_idx]
        filler_whitespace = " " * len(untokenize(parsed_tokens)) + (" " if parsed_tokens else "")
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), filler_whitespace + "^"])


class UnexpectedTokenError(ParserError):
    pass


class NestingTooDeepError(ParserError):
    pass


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()


class UnaryOperator(PrintableEnum):
    NEG = enum.auto()


@dataclass(frozen=True)
class NumberLiteral:
    value: float


@dataclass(frozen=True)
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


@dataclass(frozen=True)
class UnaryOperation:
    operator: UnaryOperator
    operand: "Expression"


Operator = BinaryOperator | UnaryOperator
Expression = NumberLiteral | BinaryOperation | UnaryOperation


@dataclass(frozen=True)
class BindingPower:
    left: int
    right: Optional[int]


# right = left + 1 makes an operator left-associative
BINDING_POWERS: dict[TokenType, BindingPower] = {
    TokenType.PLUS: BindingPower(left=50, right=51),
    TokenType.MINUS: BindingPower(left=50, right=51),
    TokenType.STAR: BindingPower(left=60, right=61),
    TokenType.SLASH: BindingPower(left=60, right=61),
    # marker only: "(" never continues an expression, so "2(3)" is rejected
    TokenType.BRACKET_OPEN: BindingPower(left=80, right=None),
}

# above every binary operator: "-2*3" is "(-2)*3"
PREFIX_MINUS_BINDING_POWER = 70

BINARY_OPERATORS: dict[TokenType, BinaryOperator] = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}

# brackets and prefix minus recurse once per level
MAX_NESTING_DEPTH = 256


class Parser:
    """Pratt parser over a fully tokenized expression.

    The token list is borrowed; the parser only moves its cursor forward.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return Token(type=TokenType.EXPR_END, lexeme="", position=self.tokens[-1].position if self.tokens else 0)

    def advance(self) -> None:
        self.pos += 1

    def expect(self, expected: TokenType) -> None:
        token = self.current()
        if token.type is not expected:
            raise UnexpectedTokenError(
                f"Expected {expected}, found {token.type}", tokens=self.tokens, error_token_idx=self.pos
            )
        self.advance()

    def parse_prefix(self) -> Expression:
        token = self.current()
        if token.type is TokenType.NUMBER:
            self.advance()
            if token.value is None:
                raise RuntimeError(f"Number token without value: {token}")
            return NumberLiteral(token.value)
        elif token.type is TokenType.BRACKET_OPEN:
            self.advance()
            expr = self.parse_expression(0)
            self.expect(TokenType.BRACKET_CLOSE)
            return expr
        elif token.type is TokenType.MINUS:
            self.advance()
            operand = self.parse_expression(PREFIX_MINUS_BINDING_POWER)
            return UnaryOperation(operator=UnaryOperator.NEG, operand=operand)
        else:
            raise UnexpectedTokenError(
                f"Operand expected, found {token.type}", tokens=self.tokens, error_token_idx=self.pos
            )

    def parse_infix(self, left: Expression, token: Token) -> Expression:
        self.advance()
        right_bp = BINDING_POWERS[token.type].right
        if right_bp is None:
            raise RuntimeError(f"Not an infix operator: {token.type}")
        right = self.parse_expression(right_bp)
        return BinaryOperation(operator=BINARY_OPERATORS[token.type], left=left, right=right)

    def parse_expression(self, min_bp: int) -> Expression:
        """Parses one expression whose operators all bind tighter than ``min_bp``.

        Stops at the first token that is not a binary operator; does not check for end of input.
        """
        if self.depth >= MAX_NESTING_DEPTH:
            raise NestingTooDeepError(
                f"Expression is nested deeper than {MAX_NESTING_DEPTH} levels",
                tokens=self.tokens,
                error_token_idx=self.pos,
            )
        self.depth += 1
        try:
            left = self.parse_prefix()
            while True:
                token = self.current()
                if token.type not in BINARY_OPERATORS:
                    break
                if BINDING_POWERS[token.type].left <= min_bp:
                    break
                left = self.parse_infix(left, token)
            return left
        finally:
            self.depth -= 1


def parse(tokens: list[Token]) -> Expression:
    parser = Parser(tokens)
    expr = parser.parse_expression(0)
    trailing = parser.current()
    if trailing.type is not TokenType.EXPR_END:
        raise UnexpectedTokenError(
            f"Unexpected {trailing.type} after the end of expression", tokens=tokens, error_token_idx=parser.pos
        )
    return expr
