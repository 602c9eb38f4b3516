"""
Repositories da estrutura física: setores, quartos e leitos.
"""
from sqlmodel import Session

from gestao_leitos.repositories.base import BaseRepository
from gestao_leitos.models.leito import Leito
from gestao_leitos.models.quarto import Quarto
from gestao_leitos.models.setor import Setor


class LeitoRepository(BaseRepository[Leito]):
    """Repository para operações de leitos."""

    def __init__(self, session: Session):
        super().__init__(session, Leito)


class SetorRepository(BaseRepository[Setor]):
    """Repository para operações de setores."""

    def __init__(self, session: Session):
        super().__init__(session, Setor)


class QuartoRepository(BaseRepository[Quarto]):
    def __init__(self, session: Session):
        super().__init__(session, Quarto)
