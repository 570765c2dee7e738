"""Common mock API responses: errors and envelope-only payloads."""

ERROR_UNAUTHORIZED = {
    "result": False,
    "error": "Unauthorized",
    "errorMessage": "Invalid or expired token",
}

ERROR_NOT_FOUND = {
    "result": False,
    "error": "not_found",
}

ERROR_BARE_FALSE = {
    "result": False,
}

RESULT_OK = {
    "result": True,
}
