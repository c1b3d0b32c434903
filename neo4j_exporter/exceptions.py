"""Exceptions for graph export operations."""

from enum import Enum


class ErrorKind(str, Enum):
    """Category tag carried by every exporter error."""

    GENERIC = "generic"
    QUERY = "query"
    RUNTIME = "runtime"


class ExporterError(Exception):
    """Base exception for exporter operations.

    Carries a human message, the optional underlying cause and a stable
    code that can be grepped for in logs.
    """

    kind = ErrorKind.GENERIC

    def __init__(self, message: str, cause: BaseException | None = None, code: str = ""):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class Neo4jQueryError(ExporterError):
    """A Neo4j query could not be executed or returned an unexpected shape."""

    kind = ErrorKind.QUERY
    MESSAGE_PREFIX = "Error during Neo4j query : "
    CODE_PREFIX = "NEO_BR_"

    def __init__(
        self,
        request: str,
        cause: BaseException | None = None,
        code: str = "",
        query: str | None = None,
    ):
        message = self.MESSAGE_PREFIX + request
        if query is not None:
            message += " . Query : " + query
        super().__init__(message, cause, self.CODE_PREFIX + code)
        self.query = query


class Neo4jRuntimeError(ExporterError):
    """The Neo4j API failed outside of a specific query."""

    kind = ErrorKind.RUNTIME
    MESSAGE_PREFIX = "Error returned by Neo4j API : "
    CODE_PREFIX = "NEO_RT_"

    def __init__(self, message: str, cause: BaseException | None = None, code: str = ""):
        super().__init__(self.MESSAGE_PREFIX + message, cause, self.CODE_PREFIX + code)
