"""
Modelo de Infecção (cadastro de referência).
"""
from sqlmodel import SQLModel, Field
from typing import Optional
import uuid


class Infeccao(SQLModel, table=True):
    """Infecção referenciada pelos isolamentos dos pacientes."""
    __tablename__ = "infeccao"
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    sigla_infeccao: str = Field(index=True)
    nome_infeccao: Optional[str] = Field(default=None)
    
    def __repr__(self) -> str:
        return f"Infeccao(id={self.id}, sigla_infeccao={self.sigla_infeccao})"
