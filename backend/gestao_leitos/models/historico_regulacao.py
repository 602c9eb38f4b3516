"""
Modelo de Histórico de Regulações.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class HistoricoRegulacao(SQLModel, table=True):
    """
    Registro histórico de uma regulação, chaveado pelo paciente.
    
    Criado pelo fluxo de início de regulação e mesclado na conclusão.
    """
    __tablename__ = "historico_regulacao"
    
    paciente_id: str = Field(primary_key=True)
    nome_paciente: Optional[str] = Field(default=None)
    
    # Dados de início
    leito_origem_id: Optional[str] = Field(default=None)
    setor_origem_id: Optional[str] = Field(default=None)
    data_inicio: Optional[datetime] = Field(default=None)
    
    # Dados de conclusão
    status: Optional[str] = Field(default=None, index=True)
    status_final: Optional[str] = Field(default=None)
    data_conclusao: Optional[datetime] = Field(default=None)
    user_name_conclusao: Optional[str] = Field(default=None)
    tempo_regulacao_minutos: Optional[int] = Field(default=None)
    leito_destino_final_id: Optional[str] = Field(default=None)
    setor_destino_final_id: Optional[str] = Field(default=None)
    
    def __repr__(self) -> str:
        return f"HistoricoRegulacao(paciente_id={self.paciente_id}, status={self.status})"
