"""Database Error Classification — maps driver exceptions onto the error hierarchy.

Invariants:
    - Pure: inspects the exception chain, never performs IO
    - Numeric MySQL codes win over message matching
    - Already-classified DatabaseError instances pass through unchanged
    - Unknown failures become a plain DatabaseError (no hint), never None
"""

from lahlah_server.core.errors import (
    DatabaseAccessError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorContext,
    SchemaError,
)

# MySQL client (2xxx) and server (1xxx) error numbers
CONNECTION_CODES = frozenset({2002, 2003, 2005, 2006, 2013})
ACCESS_CODES = frozenset({1044, 1045, 1698})
BAD_DB_CODES = frozenset({1049})

_CONNECTION_INDICATORS = (
    "connection refused",
    "can't connect to mysql server",
    "unknown mysql server host",
    "server has gone away",
    "lost connection",
)
_ACCESS_INDICATORS = ("access denied",)
_BAD_DB_INDICATORS = ("unknown database",)


def _exception_chain(exc: BaseException) -> list[BaseException]:
    """exc, its DBAPI .orig, and its cause/context links, without cycles."""
    chain: list[BaseException] = []
    pending: list[BaseException | None] = [exc]
    while pending:
        current = pending.pop(0)
        if current is None or any(current is seen for seen in chain):
            continue
        chain.append(current)
        pending.extend([
            getattr(current, "orig", None),
            current.__cause__,
            current.__context__,
        ])
    return chain


def extract_driver_code(exc: BaseException) -> int | None:
    """Return the first numeric driver error code found in the chain."""
    for link in _exception_chain(exc):
        if isinstance(link, OSError):  # errno, not a MySQL code
            continue
        args = getattr(link, "args", ())
        if args and isinstance(args[0], int) and not isinstance(args[0], bool):
            return args[0]
    return None


def _raw_message(exc: BaseException) -> str:
    for link in _exception_chain(exc):
        orig = getattr(link, "orig", None)
        if orig is not None:
            return str(orig)
    return str(exc)


def classify_database_error(
    exc: BaseException, context: ErrorContext | None = None,
) -> DatabaseError:
    """Wrap any database failure into its DatabaseError subclass."""
    if isinstance(exc, DatabaseError):
        return exc

    message = _raw_message(exc)
    code = extract_driver_code(exc)
    chain = _exception_chain(exc)

    if code in CONNECTION_CODES or any(
        isinstance(link, ConnectionRefusedError) for link in chain
    ):
        return DatabaseConnectionError(message, code, context=context)
    if code in ACCESS_CODES:
        return DatabaseAccessError(message, code, context=context)
    if code in BAD_DB_CODES:
        return SchemaError(message, code, context=context)

    lowered = message.lower()
    if any(ind in lowered for ind in _CONNECTION_INDICATORS):
        return DatabaseConnectionError(message, code, context=context)
    if any(ind in lowered for ind in _ACCESS_INDICATORS):
        return DatabaseAccessError(message, code, context=context)
    if any(ind in lowered for ind in _BAD_DB_INDICATORS):
        return SchemaError(message, code, context=context)

    return DatabaseError(message, code, context=context)
