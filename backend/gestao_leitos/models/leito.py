"""
Modelo de Leito.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from typing import Optional, List
from datetime import datetime
import uuid

from gestao_leitos.models.enums import StatusLeitoEnum


class Leito(SQLModel, table=True):
    """
    Leito hospitalar.
    
    O status é alterado pela regulação e pelos fluxos externos de
    higienização. A restrição de coorte não é armazenada aqui: é
    recalculada a cada leitura a partir dos ocupantes do quarto.
    """
    __tablename__ = "leito"
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    codigo_leito: str = Field(index=True)  # 101A, os 3 primeiros caracteres identificam o quarto
    setor_id: str = Field(foreign_key="setor.id", index=True)
    quarto_id: Optional[str] = Field(default=None)
    status: str = Field(default=StatusLeitoEnum.VAGO.value, index=True)
    is_pcp: bool = Field(default=False)
    
    # Histórico de status: [{"status": ..., "timestamp": ...}]
    historico: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    
    # Marcadores transitórios
    regulacao_em_andamento: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    reserva_externa: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    
    status_updated_at: datetime = Field(default_factory=datetime.utcnow)
    
    def __repr__(self) -> str:
        return f"Leito(id={self.id}, codigo_leito={self.codigo_leito}, status={self.status})"
