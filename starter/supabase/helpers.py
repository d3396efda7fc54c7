import re
from typing import Optional

import httpx
from postgrest.exceptions import APIError

from starter.constants import (
    PG_CHECK_VIOLATION,
    PG_FOREIGN_KEY_VIOLATION,
    PG_NOT_NULL_VIOLATION,
    PG_UNIQUE_VIOLATION,
    PGRST_SINGULAR_RESPONSE,
)
from starter.exceptions import UserErrorKind, UserRecordError
from starter.supabase.columns import Column

CONSTRAINT_CODES = {PG_NOT_NULL_VIOLATION, PG_FOREIGN_KEY_VIOLATION, PG_CHECK_VIOLATION}
ROW_COUNT = re.compile(r"\b(\d+) rows\b")


def cols(*args: Column):
    if len(args) == 0:
        return "*"

    return ", ".join([str(a) for a in args])


def classify_error_code(code: Optional[str], details: Optional[str] = None) -> UserErrorKind:
    if code == PGRST_SINGULAR_RESPONSE:
        # PostgREST reports both cases with the same code, only the details differ
        match = ROW_COUNT.search(details or "")
        if match and int(match.group(1)) == 0:
            return UserErrorKind.NOT_FOUND
        return UserErrorKind.MULTIPLE_ROWS

    if code == PG_UNIQUE_VIOLATION:
        return UserErrorKind.CONFLICT

    if code in CONSTRAINT_CODES:
        return UserErrorKind.CONSTRAINT

    return UserErrorKind.UNKNOWN


def to_user_record_error(error: Exception) -> UserRecordError:
    """
    Translate an exception raised by the Supabase client into a UserRecordError.

    Args:
        error: An APIError from PostgREST, an httpx transport error, or anything else

    Returns:
        The normalised error
    """
    if isinstance(error, UserRecordError):
        return error

    if isinstance(error, APIError):
        return UserRecordError(
            classify_error_code(error.code, error.details),
            error.message or str(error),
            code=error.code,
            details=error.details,
        )

    if isinstance(error, httpx.HTTPError):
        return UserRecordError(UserErrorKind.TRANSPORT, f"Supabase request failed: {error}")

    return UserRecordError(UserErrorKind.UNKNOWN, str(error) or error.__class__.__name__)


def unwrap_or_error(response):
    """
    Check for errors in Supabase response and return data if successful.
    Raises a UserRecordError if the response carries an error.

    Args:
        response: The response object from a Supabase query
    Returns:
        The data from the response
    """
    error = getattr(response, "error", None)
    if error:
        if isinstance(error, dict):
            code = error.get("code")
            details = error.get("details")
            message = error.get("message") or str(error)
        else:
            code = getattr(error, "code", None)
            details = getattr(error, "details", None)
            message = str(error)
        raise UserRecordError(classify_error_code(code, details), message, code=code, details=details)

    if not hasattr(response, "data"):
        raise UserRecordError(UserErrorKind.UNKNOWN, f"Supabase response missing data attribute: {response}")

    return response.data
