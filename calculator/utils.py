import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


class CalculatorError(Exception):
    """Base class for every error reported to the user (tokenizing or parsing)"""
