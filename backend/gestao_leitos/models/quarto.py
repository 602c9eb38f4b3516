"""
Modelo de Quarto.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from typing import List
import uuid


class Quarto(SQLModel, table=True):
    """
    Quarto com lista explícita de leitos.
    
    Usado em setores que não são enfermaria; nas enfermarias o quarto
    é derivado do prefixo do código do leito.
    """
    __tablename__ = "quarto"
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    nome_quarto: str
    setor_id: str = Field(foreign_key="setor.id", index=True)
    leitos_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    
    def __repr__(self) -> str:
        return f"Quarto(id={self.id}, nome_quarto={self.nome_quarto})"
