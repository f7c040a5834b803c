"""Error taxonomy shared by the handlers and the HTTP layer."""


class RecipeServiceError(Exception):
    """Base class for errors that are reported to API clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RecipeServiceError):
    """Required client input is missing or malformed."""

    status_code = 400


class NotFoundError(RecipeServiceError):
    """The referenced recipe does not exist."""

    status_code = 404


class StorageError(RecipeServiceError):
    """The storage backend failed while handling the request."""

    status_code = 500


__all__ = ["RecipeServiceError", "ValidationError", "NotFoundError", "StorageError"]
