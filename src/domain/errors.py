"""
Error taxonomy shared by all use cases.

Codes travel inside ``libs.result.Error`` and are mapped to HTTP statuses by
the API layer.
"""


class ErrorCode:
    UNAUTHENTICATED = "UNAUTHENTICATED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_TOKEN = "INVALID_TOKEN"
    EMAIL_MISMATCH = "EMAIL_MISMATCH"
    EXPIRED = "EXPIRED"
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"
    INVALID_STATE = "INVALID_STATE"
    INVALID_ROLE = "INVALID_ROLE"
    INVALID_INPUT = "INVALID_INPUT"
