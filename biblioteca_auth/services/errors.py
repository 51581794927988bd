"""Errors raised by the registration, login and refresh flows."""

# Error codes surfaced to clients alongside the message.
DUPLICATE_USERNAME = "DUPLICATE_USERNAME"
DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"

# Client-facing messages (Spanish, kept stable for existing clients).
MSG_DUPLICATE_USERNAME = "El username ya está en uso"
MSG_DUPLICATE_EMAIL = "El email ya está registrado"
MSG_INVALID_CREDENTIALS = "Credenciales inválidas"
MSG_ACCOUNT_INACTIVE = "Cuenta inactiva. Verifique su email."
MSG_INVALID_REFRESH_TOKEN = "Refresh token inválido o revocado"


class AuthServiceError(Exception):
    """Base for request-terminal failures; carries a client message and a stable code."""

    def __init__(self, message: str, code: str) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AuthServiceError):
    """Raised at registration when the username or email is already taken."""

    @classmethod
    def duplicate_username(cls) -> "ValidationError":
        return cls(MSG_DUPLICATE_USERNAME, DUPLICATE_USERNAME)

    @classmethod
    def duplicate_email(cls) -> "ValidationError":
        return cls(MSG_DUPLICATE_EMAIL, DUPLICATE_EMAIL)


class AuthError(AuthServiceError):
    """Raised on login or refresh: bad credentials, inactive account, invalid refresh token."""

    @classmethod
    def invalid_credentials(cls) -> "AuthError":
        return cls(MSG_INVALID_CREDENTIALS, INVALID_CREDENTIALS)

    @classmethod
    def account_inactive(cls) -> "AuthError":
        return cls(MSG_ACCOUNT_INACTIVE, ACCOUNT_INACTIVE)

    @classmethod
    def invalid_refresh_token(cls) -> "AuthError":
        return cls(MSG_INVALID_REFRESH_TOKEN, INVALID_REFRESH_TOKEN)
