"""Safe client-facing error messages.

Internal errors can carry credentials, connection strings, file paths or
stack fragments. Everything returned to the console goes through
:func:`sanitize_error` (or :func:`sanitize_database_error` for driver errors)
so none of that leaks into a response body.
"""


import re


class ErrorMessages:
    """Standard messages for common failure scenarios."""

    UNAUTHORIZED = "Authentication required"
    FORBIDDEN = "You do not have permission to perform this action"
    NOT_FOUND = "Resource not found"
    BAD_REQUEST = "Invalid request"
    VALIDATION_FAILED = "Validation failed"
    INTERNAL_ERROR = "An error occurred while processing your request"
    DATABASE_ERROR = "Database operation failed"
    RATE_LIMIT = "Too many requests, please try again later"
    CONFLICT = "Resource already exists or conflict detected"


_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\bpassword\b",
        r"\btoken\b",
        r"\bsecret\b",
        r"\bapi[_-]key\b",
        r"\bprivate[_-]key\b",
        r"\bsupabase[_-]service[_-]role\b",
        r"postgres://",
        r"postgresql://",
        r"\b[a-f0-9]{32,}\b",  # hashes, keys, dash-less UUIDs
        r"file://",
        r"/home/",
        r"/usr/",
        r"/var/",
        r"C:\\",
        r"stack trace",
        r"at Object\.",
        r"at async",
        r"Traceback \(most recent call last\)",
    )
]

# Only errors mentioning one of these phrases get a specific message
_SAFE_DATABASE_PHRASES: tuple[str, ...] = (
    "duplicate key",
    "unique constraint",
    "foreign key constraint",
    "violates not-null",
    "not null constraint",
    "invalid input syntax",
    "record not found",
    "no rows",
)

# (needle, safe message) pairs checked in order
_SAFE_DATABASE_ERRORS: list[tuple[tuple[str, ...], str]] = [
    (("duplicate", "unique"), "A record with this value already exists"),
    (("foreign key",), "Cannot perform this action due to related records"),
    (("not-null", "not null"), "Required field is missing"),
    (("not found", "no rows"), "Record not found"),
]


def contains_sensitive_info(text: str) -> bool:
    """Return True when *text* matches any known-sensitive pattern."""
    if not text:
        return False
    return any(p.search(text) for p in _SENSITIVE_PATTERNS)


def _message_of(error: object) -> str:
    if isinstance(error, BaseException):
        return str(error)
    message = getattr(error, "message", None)
    if message is not None:
        return str(message)
    if isinstance(error, dict) and "message" in error:
        return str(error["message"])
    return ""


def sanitize_error(error: object, fallback: str) -> str:
    """Return a message safe to show a client, or *fallback*."""
    if not error:
        return fallback

    if isinstance(error, str):
        return fallback if contains_sensitive_info(error) else error

    message = _message_of(error)
    if not message or contains_sensitive_info(message):
        return fallback
    return message


def sanitize_database_error(error: object) -> str:
    """Collapse a database error into one of a few fixed messages."""
    if not error:
        return ErrorMessages.DATABASE_ERROR

    lowered = (_message_of(error) or str(error)).lower()
    if not any(phrase in lowered for phrase in _SAFE_DATABASE_PHRASES):
        return ErrorMessages.DATABASE_ERROR
    for needles, safe in _SAFE_DATABASE_ERRORS:
        if any(n in lowered for n in needles):
            return safe
    return ErrorMessages.DATABASE_ERROR
