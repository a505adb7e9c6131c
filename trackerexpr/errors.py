from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    PARSE_ERROR = "parse_error"
    UNKNOWN_FUNCTION = "unknown_function"
    DEPRECATED_FUNCTION = "deprecated_function"
    TYPE_ERROR = "type_error"
    DIVIDE_BY_ZERO = "divide_by_zero"
    INVALID_RANGE = "invalid_range"
    NO_DATASET = "no_dataset"
    NO_STREAK_OR_BREAK = "no_streak_or_break"
    ALIGNMENT = "alignment"
    NO_DATA = "no_data"
    FORMAT_ERROR = "format_error"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ExprError:
    """Error value returned through the same channel as evaluation results."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"Error: {self.message}"


class ExpressionError(ValueError):
    def __init__(self, error: ExprError) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


def parse_error(message: str) -> ExprError:
    return ExprError(ErrorKind.PARSE_ERROR, message)


def unknown_function_error(name: str) -> ExprError:
    return ExprError(ErrorKind.UNKNOWN_FUNCTION, f"Unknown function '{name}'")


def bare_identifier_error(name: str) -> ExprError:
    return ExprError(
        ErrorKind.UNKNOWN_FUNCTION,
        f"Deprecated template variable '{name}', use '{name}()' instead",
    )


def deprecated_function_error(name: str) -> ExprError:
    return ExprError(ErrorKind.DEPRECATED_FUNCTION, f"Function '{name}' has been deprecated")


def type_error(message: str) -> ExprError:
    return ExprError(ErrorKind.TYPE_ERROR, message)


def invalid_operand_error() -> ExprError:
    return ExprError(ErrorKind.TYPE_ERROR, "Invalid operand, expected a number, date or dataset")


def operation_error(operator: str) -> ExprError:
    return ExprError(ErrorKind.TYPE_ERROR, f"Unknown operation for '{operator}'")


def divide_by_zero_error() -> ExprError:
    return ExprError(ErrorKind.DIVIDE_BY_ZERO, "Division by zero in expression")


def no_dataset_error(message: str) -> ExprError:
    return ExprError(ErrorKind.NO_DATASET, message)


def no_data_error(message: str) -> ExprError:
    return ExprError(ErrorKind.NO_DATA, message)


def alignment_error(operator: str) -> ExprError:
    return ExprError(
        ErrorKind.ALIGNMENT,
        f"Datasets combined with '{operator}' must share the same dates",
    )
