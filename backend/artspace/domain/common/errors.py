"""Domain error types."""


class DomainError(Exception):
    """Base domain error."""
    pass


class NotFoundError(DomainError):
    """Resource not found."""
    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class ValidationError(DomainError):
    """Input rejected before any write."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationRequiredError(DomainError):
    """Operation needs a session user."""
    def __init__(self, message: str = "Sign in required"):
        self.message = message
        super().__init__(message)


class AuthorizationError(DomainError):
    """Authorization error."""
    def __init__(self, message: str = "Not authorized"):
        self.message = message
        super().__init__(message)


class ConflictError(DomainError):
    """Resource conflict error."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StorageQuotaError(DomainError):
    """A write would exceed the storage quota; nothing was written."""
    def __init__(self, key: str, required: int, quota: int):
        self.key = key
        self.required = required
        self.quota = quota
        super().__init__(
            f"Storage limit reached writing {key}: {required} bytes needed, quota is {quota}. "
            "Delete some older artworks to free up space."
        )


class DataIntegrityError(DomainError):
    """Persisted data could not be parsed or holds values outside a closed set."""
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Corrupt data under {key}: {reason}")
