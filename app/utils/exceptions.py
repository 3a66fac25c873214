"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Services and repositories raise these directly; FastAPI renders them as
``{"detail": ...}`` responses. User-facing messages are Portuguese.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Agendamento não encontrado")
    raise DuplicateError("E-mail já cadastrado")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a requested resource (employee, store, pickup token, etc.)
    does not exist or is not visible to the caller.
    """

    def __init__(self, detail: str = "Recurso não encontrado") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    Raised when a write would violate a uniqueness rule
    (duplicate e-mail or CPF on account creation).
    """

    def __init__(self, detail: str = "Registro já existe") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 역할이 맞지 않을 때 사용 (Caller's role may not perform the action)."""

    def __init__(self, detail: str = "Acesso negado") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when authentication is missing, invalid, or expired.
    """

    def __init__(self, detail: str = "Autenticação necessária") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 업무 규칙 검증 실패 시 사용.

    Raised for business-rule validation failures beyond what Pydantic catches:
    quota exceeded, capacity exhausted, blocked date, weak password, invalid
    state transition.
    """

    def __init__(self, detail: str = "Requisição inválida") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
