class PivotError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PivotValidationError(PivotError):
    """Malformed dimension type, patient identifier or query parameter."""


class DataAccessError(PivotError):
    """Reading mention rows from storage failed."""
