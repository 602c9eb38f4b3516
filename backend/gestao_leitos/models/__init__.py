"""
Modelos de dados do sistema.
Reexporta todos os modelos para imports simplificados.
"""
from gestao_leitos.models.enums import (
    SexoEnum,
    StatusLeitoEnum,
    TipoSetorEnum,
    ModoBuscaEnum,
    TipoRiscoEnum,
    StatusRegulacaoEnum,
)

from gestao_leitos.models.setor import Setor
from gestao_leitos.models.quarto import Quarto
from gestao_leitos.models.leito import Leito
from gestao_leitos.models.paciente import Paciente
from gestao_leitos.models.infeccao import Infeccao
from gestao_leitos.models.historico_regulacao import HistoricoRegulacao
from gestao_leitos.models.auditoria import LogAuditoria

__all__ = [
    # Enums
    "SexoEnum",
    "StatusLeitoEnum",
    "TipoSetorEnum",
    "ModoBuscaEnum",
    "TipoRiscoEnum",
    "StatusRegulacaoEnum",
    # Models
    "Setor",
    "Quarto",
    "Leito",
    "Paciente",
    "Infeccao",
    "HistoricoRegulacao",
    "LogAuditoria",
]
