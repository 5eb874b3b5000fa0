"""
Domain exceptions and the user-facing messages they map to.

Every error raised by the services derives from PodmayakError. The app
registers a single exception handler that turns them into JSON responses
with a stable `code` and a human readable `message`.
"""
from enum import Enum
from typing import Optional


class PodmayakError(Exception):
    """Base class for all domain errors"""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str = "", *, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class BackendError(PodmayakError):
    """A remote call (generation, analysis, chat) failed"""

    status_code = 502
    code = "backend_error"

    def __init__(self, message: str = "", *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class TransientBackendError(BackendError):
    """The backend is overloaded or temporarily unavailable; retrying may succeed"""

    status_code = 503
    code = "backend_unavailable"


class FatalBackendError(BackendError):
    """The backend rejected the call; retrying will not help"""

    code = "backend_failed"


class GenerationError(FatalBackendError):
    """The backend answered but returned no usable image"""

    code = "no_image_generated"


class InsufficientTokensError(PodmayakError):
    """Raised before a paid operation when the token balance is exhausted"""

    status_code = 402
    code = "payment_required"

    def __init__(self, message: str = "Kifayət qədər token yoxdur. Zəhmət olmasa balansı artırın."):
        super().__init__(message)


class BlobNotFoundError(PodmayakError):
    status_code = 404
    code = "blob_not_found"


class StorageError(PodmayakError):
    status_code = 500
    code = "storage_error"


class ImageDecodeError(PodmayakError):
    status_code = 400
    code = "invalid_image"


class AuthErrorCode(str, Enum):
    """Identity provider error codes"""

    INVALID_CREDENTIAL = "auth/invalid-credential"
    USER_NOT_FOUND = "auth/user-not-found"
    WRONG_PASSWORD = "auth/wrong-password"
    EMAIL_ALREADY_IN_USE = "auth/email-already-in-use"
    WEAK_PASSWORD = "auth/weak-password"
    NETWORK_REQUEST_FAILED = "auth/network-request-failed"
    UNKNOWN = "auth/unknown"


GENERIC_AUTH_MESSAGE = "Xəta baş verdi. Zəhmət olmasa yenidən cəhd edin."

AUTH_ERROR_MESSAGES = {
    AuthErrorCode.USER_NOT_FOUND: "İstifadəçi tapılmadı. Zəhmət olmasa qeydiyyatdan keçin.",
    AuthErrorCode.WRONG_PASSWORD: "Şifrə yanlışdır.",
    AuthErrorCode.EMAIL_ALREADY_IN_USE: "Bu email artıq istifadə olunur. Giriş etməyə çalışın.",
    AuthErrorCode.WEAK_PASSWORD: "Şifrə çox zəifdir. Ən azı 6 simvol olmalıdır.",
    AuthErrorCode.NETWORK_REQUEST_FAILED: "İnternet bağlantısını yoxlayın.",
}

AUTH_ERROR_STATUS = {
    AuthErrorCode.INVALID_CREDENTIAL: 401,
    AuthErrorCode.USER_NOT_FOUND: 401,
    AuthErrorCode.WRONG_PASSWORD: 401,
    AuthErrorCode.EMAIL_ALREADY_IN_USE: 409,
    AuthErrorCode.WEAK_PASSWORD: 400,
    AuthErrorCode.NETWORK_REQUEST_FAILED: 503,
}


def auth_error_message(code, is_login: bool = True) -> str:
    """Map an identity provider error code to a localized message.

    `code` may be an AuthErrorCode or the raw provider string. Unrecognized
    codes get the generic message.
    """
    try:
        code = AuthErrorCode(code)
    except ValueError:
        return GENERIC_AUTH_MESSAGE

    if code == AuthErrorCode.INVALID_CREDENTIAL:
        if is_login:
            return "Email və ya şifrə yanlışdır. Zəhmət olmasa məlumatları yoxlayın."
        return "Bu email ilə qeydiyyat mümkün olmadı. Başqa email yoxlayın."

    return AUTH_ERROR_MESSAGES.get(code, GENERIC_AUTH_MESSAGE)


class AuthError(PodmayakError):
    """Sign-up / sign-in failure carrying a provider-style error code"""

    def __init__(self, auth_code: AuthErrorCode, *, is_login: bool = True):
        super().__init__(auth_error_message(auth_code, is_login=is_login), code=auth_code.value)
        self.auth_code = auth_code
        self.status_code = AUTH_ERROR_STATUS.get(auth_code, 400)
