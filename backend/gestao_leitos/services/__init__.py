"""
Serviços de regras de negócio.
Contêm a lógica principal do sistema.
"""
from gestao_leitos.services.dados_hospitalares_service import DadosHospitalaresService, SnapshotHospitalar
from gestao_leitos.services.regulacao_service import RegulacaoService, concluir_regulacao
from gestao_leitos.services.uti_service import UtiService

__all__ = [
    "DadosHospitalaresService",
    "SnapshotHospitalar",
    "RegulacaoService",
    "concluir_regulacao",
    "UtiService",
]
