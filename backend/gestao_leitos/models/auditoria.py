"""
Modelo de Log de Auditoria.
"""
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
import uuid


class LogAuditoria(SQLModel, table=True):
    """
    Trilha de auditoria das ações do sistema (somente inclusão).
    """
    __tablename__ = "log_auditoria"
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    timestamp: datetime = Field(default_factory=datetime.utcnow, index=True)
    
    # Página ou categoria da ação (ex.: "Regulação de Leitos")
    acao: str = Field(index=True)
    detalhes: str
    
    user_id: str = Field(default="sistema")
    user_name: str = Field(default="Sistema")
    
    def __repr__(self) -> str:
        return f"LogAuditoria(acao={self.acao}, detalhes={self.detalhes[:50]}...)"
