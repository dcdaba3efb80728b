"""Exceções de domínio e sua tradução para respostas HTTP"""
from typing import Iterable, List, Optional
from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class SimplevalError(Exception):
    """Erro base da aplicação"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "detail": self.message}


class ValidationError(SimplevalError):
    """Entrada viola as regras de partida; corrigível pelo chamador"""
    status_code = 400

    def __init__(self, reasons: Iterable[str]):
        self.reasons: List[str] = list(reasons)
        super().__init__("; ".join(self.reasons) or "invalid input")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["reasons"] = self.reasons
        return data


class NotFoundError(SimplevalError):
    """Time, jogador ou partida referenciado não existe"""
    status_code = 404


class ConflictError(SimplevalError):
    """Participante duplicado ou novo snapshot de partida já escalada"""
    status_code = 400


class ConsistencyError(SimplevalError):
    """Uma invariante transacional estava prestes a ser violada"""
    status_code = 500


class StoreError(SimplevalError):
    """Falha da camada de persistência"""
    status_code = 500


def error_response(exc: SimplevalError, status_code: Optional[int] = None) -> JSONResponse:
    """Monta a resposta JSON estruturada de um erro de domínio"""
    return JSONResponse(
        status_code=status_code or exc.status_code,
        content=exc.to_dict(),
    )


async def simpleval_error_handler(request: Request, exc: SimplevalError) -> JSONResponse:
    """Handler global registrado no app FastAPI"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} em {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} em {request.method} {request.url.path}: {exc.message}")
    return error_response(exc)
