"""
Modelo de Paciente.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from typing import Optional, List
import uuid


class Paciente(SQLModel, table=True):
    """
    Paciente internado ou aguardando leito.
    
    Os campos aninhados (isolamentos, regulação ativa, pedidos) são
    documentos JSON no formato recebido dos fluxos de admissão.
    O sexo e a data de nascimento ficam como chegaram; a normalização
    acontece na leitura.
    """
    __tablename__ = "paciente"
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    nome_paciente: str
    sexo: Optional[str] = Field(default=None)
    data_nascimento: Optional[str] = Field(default=None)
    
    # ============================================
    # LOCALIZAÇÃO
    # ============================================
    leito_id: Optional[str] = Field(default=None, index=True)
    setor_id: Optional[str] = Field(default=None, index=True)
    setor_origem: Optional[str] = Field(default=None)
    
    # ============================================
    # DOCUMENTOS ANINHADOS
    # ============================================
    isolamentos: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    regulacao_ativa: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    pedido_uti: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    pedido_remanejamento: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    
    def __repr__(self) -> str:
        return f"Paciente(id={self.id}, nome_paciente={self.nome_paciente}, leito_id={self.leito_id})"
