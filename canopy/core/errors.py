"""Error kinds, severities and exit codes.

Every problem surfaced to the operator is a `SiteError`: a kind from a closed
set, a severity deciding whether the build goes on, an optional hint, and an
optional cause that may itself be a `SiteError`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum, auto

__all__ = [
    "ErrorCode",
    "ErrorKind",
    "Severity",
    "SiteError",
    "exit_code_for",
]


class ErrorCode(IntEnum):
    """Process exit codes. Values are stable.

    - 0: Success
    - 1: User error (invalid configuration, bad arguments)
    - 3: Build error (a component could not be built)
    - 4: Network error (release source unreachable)
    - 5: I/O error (output directory not writable)
    """

    OK = 0
    USER_ERROR = 1
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


class Severity(Enum):
    FATAL = auto()
    WARNING = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ErrorKind(Enum):
    STRUCTURAL_IO = auto()  # output dir or page cannot be written
    SOURCE_UNREACHABLE = auto()  # release API / funding source failed
    MANIFEST_MALFORMED = auto()  # manifest not decodable
    MANIFEST_PARTIAL = auto()  # manifest schema version mismatch
    CONFIG_INVALID = auto()
    COMPONENT_FAILED = auto()  # render / book / funding component failed

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


@dataclass(frozen=True, slots=True)
class SiteError:
    """A build problem with its severity and cause chain.

    Attributes:
        kind: What went wrong.
        message: One-line, operator-facing description.
        severity: FATAL stops the build, WARNING is printed and skipped.
        hint: Optional suggestion for fixing it.
        cause: The underlying error, either another SiteError or the text of
            a lower-level exception.
    """

    kind: ErrorKind
    message: str
    severity: Severity = Severity.FATAL
    hint: str | None = None
    cause: SiteError | str | None = None

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    def as_warning(self) -> SiteError:
        """Return a copy downgraded to WARNING."""
        return replace(self, severity=Severity.WARNING)

    def chain(self) -> list[str]:
        """Return the messages of every cause, outermost first (self excluded)."""
        out: list[str] = []
        cause = self.cause
        while cause is not None:
            if isinstance(cause, SiteError):
                out.append(cause.message)
                cause = cause.cause
            else:
                out.append(cause)
                cause = None
        return out

    def __str__(self) -> str:
        return self.message


def exit_code_for(error: SiteError) -> int:
    """Map an error to the process exit code."""
    match error.kind:
        case ErrorKind.STRUCTURAL_IO:
            return int(ErrorCode.IO_ERROR)
        case ErrorKind.SOURCE_UNREACHABLE:
            return int(ErrorCode.NETWORK_ERROR)
        case ErrorKind.CONFIG_INVALID:
            return int(ErrorCode.USER_ERROR)
        case ErrorKind.MANIFEST_MALFORMED | ErrorKind.MANIFEST_PARTIAL | ErrorKind.COMPONENT_FAILED:
            return int(ErrorCode.BUILD_ERROR)
    return int(ErrorCode.BUILD_ERROR)
