"""HTTP status codes for classified failures."""

from ...models.summary import ErrorKind

ERROR_STATUS = {
    ErrorKind.INVALID_URL: 422,
    ErrorKind.FETCH_FAILURE: 502,
    ErrorKind.MISSING_CREDENTIAL: 401,
    ErrorKind.AUTH_REJECTED: 403,
    ErrorKind.UPSTREAM_ERROR: 502,
    ErrorKind.EMPTY_RESPONSE: 502,
}


def error_status(kind: ErrorKind | None) -> int:
    return ERROR_STATUS.get(kind, 500)
