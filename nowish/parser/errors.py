"""Parser exceptions."""

from __future__ import annotations

from nowish.parser.schema import ErrorKind, ErrorPosition


class ParseError(ValueError):
    """Raised when an expression cannot be parsed.

    For `ErrorKind.invalid_value`, `position` names the grammar slot whose token was not
    recognized by the parser configuration. Structure errors carry no position.
    """

    def __init__(
            self,
            kind: ErrorKind,
            value: str,
            position: ErrorPosition | None = None,
    ) -> None:
        if kind == ErrorKind.invalid_value and position is None:
            raise TypeError("invalid-value errors require a position")

        if kind == ErrorKind.invalid_structure:
            message = f"invalid expression: '{value}'"
        else:
            message = f"invalid {position}: '{value}'"
        super().__init__(message)

        self.kind = kind
        self.value = value
        self.position = position


class ParserConfigError(ValueError):
    """Raised when a parser configuration is unusable (empty alias list, empty unit table, ...)."""
