from sqlalchemy.exc import IntegrityError


class DuplicateKeyError(Exception):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Duplicate key: {reason}")


class RecordValidationError(Exception):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


def is_unique_violation(error: IntegrityError) -> bool:
    """True when the driver reports a unique-constraint violation."""
    orig = error.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code == "23505"
    return "unique constraint" in str(orig).lower()


def translate_integrity_error(error: IntegrityError) -> Exception:
    if is_unique_violation(error):
        return DuplicateKeyError(str(error.orig))
    return RecordValidationError(str(error.orig))
