"""
Endpoints de Health Check.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlmodel import Session
from datetime import datetime

from gestao_leitos.config import settings
from gestao_leitos.core.database import get_session, verificar_banco

router = APIRouter(
    prefix="/health",
    tags=["health"],
    responses={
        200: {"description": "Sistema saudável"},
        503: {"description": "Sistema indisponível"}
    }
)


@router.get(
    "",
    summary="Health Check",
    description="Verifica a aplicação e a conexão com o banco",
    response_model=None
)
def health_check(session: Session = Depends(get_session)) -> JSONResponse:
    """
    Retorna 200 se a aplicação e o banco estão disponíveis, 503 caso contrário.
    """
    banco = verificar_banco(session)
    saudavel = banco.get("status") == "healthy"

    return JSONResponse(
        status_code=status.HTTP_200_OK if saudavel else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if saudavel else "unhealthy",
            "timestamp": datetime.now().isoformat(),
            "version": settings.APP_VERSION,
            "environment": settings.APP_ENV,
            "components": {"database": banco},
        }
    )
