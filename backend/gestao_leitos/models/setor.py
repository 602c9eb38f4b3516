"""
Modelo de Setor.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
import uuid


class Setor(SQLModel, table=True):
    """
    Setor hospitalar.
    
    O tipo define o pool de leitos (Enfermaria, UTI) e se o setor é
    considerado aberto para fins de risco de contaminação.
    """
    __tablename__ = "setor"
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    nome_setor: str
    sigla_setor: Optional[str] = Field(default=None)
    tipo_setor: str = Field(default="Outros", index=True)
    
    def __repr__(self) -> str:
        return f"Setor(id={self.id}, nome_setor={self.nome_setor}, tipo_setor={self.tipo_setor})"
