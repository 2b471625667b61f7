# /usr/bin/env python3

# procfs_decode exceptions

from typing import Optional


class ProcfsError(Exception):
    pass


class ProcfsReadError(ProcfsError):
    def __init__(self, path: str, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"{path}: {error.strerror or error}")


class InvalidTickRate(ProcfsError, ValueError):
    def __init__(self, ticks_per_second):
        self.ticks_per_second = ticks_per_second
        super().__init__(
            f"invalid tick rate {ticks_per_second!r}, must be a positive integer"
        )


class DecodeError(ProcfsError):
    """Base class for failures to decode the content of a procfs file.

    The path is unknown to the decoders, the load_* helpers fill it in before
    re-raising.
    """

    def __init__(
        self,
        msg: str,
        lineno: Optional[int] = None,
        line: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.msg = msg
        self.lineno = lineno
        self.line = line
        self.path = path
        super().__init__(msg)

    def __str__(self) -> str:
        location = ":".join(
            str(part) for part in (self.path, self.lineno) if part is not None
        )
        return f"{location}: {self.msg}" if location else self.msg


class MalformedLine(DecodeError):
    pass


class NumericParseFailure(DecodeError):
    def __init__(
        self,
        field: str,
        token: str,
        lineno: Optional[int] = None,
        line: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.field = field
        self.token = token
        super().__init__(
            f"{field}: invalid number {token!r}", lineno=lineno, line=line, path=path
        )


class UnsupportedVersion(DecodeError):
    def __init__(
        self,
        version: int,
        lineno: Optional[int] = None,
        line: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.version = version
        super().__init__(
            f"unsupported version {version}", lineno=lineno, line=line, path=path
        )
