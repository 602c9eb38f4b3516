"""
Repository de Infecção.
"""
from typing import Dict
from sqlmodel import Session

from gestao_leitos.repositories.base import BaseRepository
from gestao_leitos.models.infeccao import Infeccao


class InfeccaoRepository(BaseRepository[Infeccao]):
    """Repository do cadastro de infecções."""

    def __init__(self, session: Session):
        super().__init__(session, Infeccao)

    def obter_mapa(self) -> Dict[str, Infeccao]:
        """Cadastro completo indexado pelo ID, para enriquecer isolamentos."""
        return {infeccao.id: infeccao for infeccao in self.obter_todos()}
