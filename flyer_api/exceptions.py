# flyer_api/exceptions.py


class DomainError(Exception):
    """Base class for all domain-level exceptions."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


# --- Authentication Errors ---

class UnauthenticatedError(DomainError):
    """Raised when a request carries no bearer token, or one that does not verify."""

    status_code = 401

    def __init__(self, message: str = "Token is not valid"):
        super().__init__(message)


class InvalidCredentialsError(DomainError):
    """Raised on login when the email is unknown or the password does not match."""

    status_code = 401

    def __init__(self):
        super().__init__("Invalid credentials")


class EmailAlreadyRegisteredError(DomainError):
    status_code = 400

    def __init__(self, email: str):
        super().__init__("User already exists")
        self.email = email


# --- Not Found Errors ---
# Absent and not-owned records raise the same error, with the same message.

class NotFoundError(DomainError):
    status_code = 404


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str):
        super().__init__("Product not found")
        self.product_id = product_id


class FlyerNotFoundError(NotFoundError):
    def __init__(self, flyer_id: str):
        super().__init__("Flyer not found")
        self.flyer_id = flyer_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User not found")
        self.user_id = user_id


# --- Conflict Errors ---

class DuplicateBarcodeError(DomainError):
    """Raised when the owner already has another product with this barcode."""

    status_code = 400

    def __init__(self, barcode: str):
        super().__init__("Barcode already exists for this user")
        self.barcode = barcode


# --- Infrastructure Errors ---

class StorageUnavailableError(DomainError):
    """Raised when the database cannot be reached. Never retried."""

    status_code = 503

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message)
