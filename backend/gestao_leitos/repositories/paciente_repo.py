"""
Repository de Paciente.
"""
from typing import Optional
from sqlmodel import Session, select

from gestao_leitos.repositories.base import BaseRepository
from gestao_leitos.models.paciente import Paciente


class PacienteRepository(BaseRepository[Paciente]):
    """Repository para operações de pacientes."""

    def __init__(self, session: Session):
        super().__init__(session, Paciente)

    def obter_para_atualizacao(self, paciente_id: str) -> Optional[Paciente]:
        """
        Obtém o paciente bloqueando a linha até o fim da transação.

        Em bancos sem suporte a SELECT ... FOR UPDATE (SQLite) o bloqueio
        é ignorado pelo dialeto.

        Args:
            paciente_id: ID do paciente

        Returns:
            O paciente ou None
        """
        query = select(Paciente).where(Paciente.id == paciente_id).with_for_update()
        return self.session.exec(query).first()
