from typing import Iterable

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Campos faltantes o inválidos en una operación de escritura."""

    def __init__(self, fields: Iterable[str], message: str = "Campos inválidos o faltantes"):
        self.fields = list(fields)
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": message, "fields": self.fields},
        )


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Recurso no encontrado"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "No autorizado"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class StoreError(HTTPException):
    def __init__(self, detail: str = "Error del servidor"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
