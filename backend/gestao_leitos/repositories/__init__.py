"""
Repositories para acesso a dados.
Isolam as consultas SQL dos serviços.
"""
from gestao_leitos.repositories.base import BaseRepository
from gestao_leitos.repositories.paciente_repo import PacienteRepository
from gestao_leitos.repositories.leito_repo import LeitoRepository, SetorRepository, QuartoRepository
from gestao_leitos.repositories.infeccao_repo import InfeccaoRepository

__all__ = [
    "BaseRepository",
    "PacienteRepository",
    "LeitoRepository",
    "SetorRepository",
    "QuartoRepository",
    "InfeccaoRepository",
]
