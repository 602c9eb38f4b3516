"""
API Principal do Sistema de Gestão de Leitos Hospitalares.
Compatibilidade de leitos, riscos de contaminação e regulação de pacientes.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from gestao_leitos.api import api_router
from gestao_leitos.config import settings
from gestao_leitos.core.database import create_db_and_tables
from gestao_leitos.core.exceptions import BaseAppException, NotFoundError, RegulacaoError
from gestao_leitos.schemas.responses import ErrorResponse
from gestao_leitos.utils.logger import configurar_logging

logger = logging.getLogger("gestao_leitos.main")

# Criar aplicação
app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


# ============================================
# EVENTOS DE INÍCIO
# ============================================

@app.on_event("startup")
def on_startup():
    configurar_logging()
    create_db_and_tables()
    logger.info(f"{settings.APP_TITLE} v{settings.APP_VERSION} iniciado ({settings.APP_ENV})")


# ============================================
# ERROS DA APLICAÇÃO
# ============================================

@app.exception_handler(BaseAppException)
def tratar_erro_aplicacao(request: Request, exc: BaseAppException) -> JSONResponse:
    """Erros de domínio não tratados pelos endpoints."""
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, RegulacaoError):
        status_code = 503
    else:
        status_code = 400

    logger.warning(f"{exc.code} em {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=exc.code, detail=exc.message).model_dump()
    )


app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
