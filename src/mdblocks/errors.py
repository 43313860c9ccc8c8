"""Error hierarchy for mdblocks.

Every public error class inherits from :class:`MdBlocksError` and carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, a structured ``context`` dict and an optional chained
``cause``.

Splitting and diffing never raise on malformed Markdown.  These errors
cover API misuse (wrong argument types, colliding ids from an injected id
generator) and command replay against an inconsistent block container.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the library can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_BLOCK_ID = "DUPLICATE_BLOCK_ID"
    COMMAND_ERROR = "COMMAND_ERROR"


class MdBlocksError(Exception):
    """Base exception for all mdblocks errors.

    Subclasses pin their category through the ``default_code`` class
    attribute, so callers only pass what varies per raise site.

    Parameters
    ----------
    message:
        Developer-facing description of what went wrong.
    context:
        Structured diagnostic data.  Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    code:
        Overrides ``default_code``; rarely needed outside tests.
    """

    default_code: ClassVar[str] = "MDBLOCKS_ERROR"

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class MdBlocksValidationError(MdBlocksError):
    """An argument has the wrong type or shape.

    Context keys: ``argument``, ``expected``, ``actual``.
    """

    default_code = ErrorCode.VALIDATION_ERROR


class MdBlocksDuplicateIdError(MdBlocksError):
    """An id generator produced an id that is already live in the document.

    Context keys: ``block_id``.
    """

    default_code = ErrorCode.DUPLICATE_BLOCK_ID


class MdBlocksCommandError(MdBlocksError):
    """A DOM command could not be replayed against a block container.

    Context keys: ``command``, ``block_id``, ``ref_id``.
    """

    default_code = ErrorCode.COMMAND_ERROR
