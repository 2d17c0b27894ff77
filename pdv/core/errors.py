"""
Domain error taxonomy

Services raise these; the exception handlers registered in ``pdv.main``
translate them to HTTP responses.
"""

from fastapi import status


class PDVError(Exception):
    """Base class for errors that map to an HTTP status"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Erro no servidor"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PDVError):
    """Missing or malformed input"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Dados inválidos"


class AuthError(PDVError):
    """Bad credentials or session token

    ``reason`` is one of ``credentials``, ``missing``, ``invalid`` or
    ``expired``. Only a missing token or bad credentials answer 401; a token
    that was presented but cannot be trusted answers 403.
    """

    default_message = "Não autenticado"

    def __init__(self, message: str | None = None, reason: str = "credentials"):
        super().__init__(message)
        self.reason = reason

    @property
    def status_code(self) -> int:  # type: ignore[override]
        if self.reason in ("invalid", "expired"):
            return status.HTTP_403_FORBIDDEN
        return status.HTTP_401_UNAUTHORIZED


class ForbiddenError(PDVError):
    """Inactive tenant, lapsed subscription or insufficient role"""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Acesso negado"


class NotFoundError(PDVError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Registro não encontrado"


class ConflictError(PDVError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Registro já existe"


class StorageError(PDVError):
    """File I/O or JSON parse failure in the record store"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Erro ao acessar os dados"
