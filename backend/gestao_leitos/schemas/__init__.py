"""
Schemas Pydantic para validação e serialização.
"""
from gestao_leitos.schemas.normalizados import (
    IsolamentoNormalizado,
    RegulacaoAtiva,
    PedidoUTI,
    PacienteNormalizado,
    SetorNormalizado,
    QuartoNormalizado,
    LeitoNormalizado,
)

from gestao_leitos.schemas.responses import (
    MessageResponse,
    ErrorResponse,
    LeitoResponse,
    LeitosCompativeisResponse,
    RelatorioCompatibilidadeResponse,
    SetorLeitosVagosResponse,
    RiscoPacienteResponse,
    ConcluirRegulacaoRequest,
    FinalizarPedidosUtiRequest,
)

__all__ = [
    # Normalizados
    "IsolamentoNormalizado",
    "RegulacaoAtiva",
    "PedidoUTI",
    "PacienteNormalizado",
    "SetorNormalizado",
    "QuartoNormalizado",
    "LeitoNormalizado",
    # API
    "MessageResponse",
    "ErrorResponse",
    "LeitoResponse",
    "LeitosCompativeisResponse",
    "RelatorioCompatibilidadeResponse",
    "SetorLeitosVagosResponse",
    "RiscoPacienteResponse",
    "ConcluirRegulacaoRequest",
    "FinalizarPedidosUtiRequest",
]
