import enum
import re
from dataclasses import dataclass
from typing import Optional

from calculator.utils import CalculatorError, PrintableEnum


@dataclass
class TokenizerError(CalculatorError):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"[Tokenizer error] {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


class InvalidCharacterError(TokenizerError):
    pass


class MalformedNumberError(TokenizerError):
    pass


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EXPR_END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    value: Optional[float] = None
    position: int = 0

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


def _is_valid_in_number(s: str) -> bool:
    # str.isdigit() would also accept things like "²"
    return s in "0123456789."


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}


def tokenize(code: str) -> list[Token]:
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if _is_valid_in_number(code[i]):
            number_end_idx = i + 1
            while number_end_idx < len(code) and _is_valid_in_number(code[number_end_idx]):
                number_end_idx += 1
            lexeme = code[i:number_end_idx]
            try:
                value = float(lexeme)
            except ValueError:
                raise MalformedNumberError(f"Malformed number: {lexeme!r}", code=code, error_char_idx=i) from None
            tokens.append(Token(type=TokenType.NUMBER, lexeme=lexeme, value=value, position=i))
            i = number_end_idx - 1  # to account for += 1 later
        elif code[i] in SINGLE_CHAR_TOKENS:
            tokens.append(Token(type=SINGLE_CHAR_TOKENS[code[i]], lexeme=code[i], position=i))
        elif code[i] == " ":
            pass
        else:
            raise InvalidCharacterError(f"Unexpected character: {code[i]!r}", code=code, error_char_idx=i)
        i += 1

    tokens.append(Token(type=TokenType.EXPR_END, lexeme="", position=len(code)))
    return tokens


def untokenize(tokens: list[Token]) -> str:
    result = " ".join(t.lexeme for t in tokens).rstrip()

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)
    return result
