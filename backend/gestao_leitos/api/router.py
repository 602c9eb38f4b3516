"""
Router principal que agrupa todos os sub-routers.
"""
from fastapi import APIRouter

from gestao_leitos.api import health
from gestao_leitos.api import leitos
from gestao_leitos.api import isolamentos
from gestao_leitos.api import regulacoes
from gestao_leitos.api import uti

api_router = APIRouter()

# Health Check
api_router.include_router(health.router)

api_router.include_router(
    leitos.router,
    prefix="/leitos",
    tags=["Leitos"]
)

api_router.include_router(
    isolamentos.router,
    prefix="/isolamentos",
    tags=["Isolamentos"]
)

api_router.include_router(
    regulacoes.router,
    prefix="/regulacoes",
    tags=["Regulações"]
)

api_router.include_router(
    uti.router,
    prefix="/uti",
    tags=["UTI"]
)
