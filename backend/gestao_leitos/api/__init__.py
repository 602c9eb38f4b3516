"""
Endpoints da API REST.
"""
from gestao_leitos.api.router import api_router

__all__ = ["api_router"]
