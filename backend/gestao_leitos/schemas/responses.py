"""
Schemas de requisição e resposta da API.
"""
from pydantic import BaseModel, Field
from typing import Optional, List


class MessageResponse(BaseModel):
    """Resposta genérica com mensagem."""
    success: bool
    message: str
    data: Optional[dict] = None


class ErrorResponse(BaseModel):
    """Resposta de erro."""
    error: str
    detail: Optional[str] = None


# ============================================
# LEITOS
# ============================================

class LeitoResponse(BaseModel):
    """Leito retornado nas buscas de compatibilidade."""
    id: str
    codigo_leito: str
    setor_id: Optional[str] = None
    nome_setor: Optional[str] = None
    sigla_setor: Optional[str] = None
    status: str
    is_pcp: bool = False


class LeitosCompativeisResponse(BaseModel):
    """Resultado da busca de leitos compatíveis."""
    paciente_id: str
    modo: str
    total: int
    leitos: List[LeitoResponse]


class RegraCompatibilidadeResponse(BaseModel):
    regra: str
    mensagem: str
    leitos: List[LeitoResponse]


class RelatorioCompatibilidadeResponse(BaseModel):
    """Detalhamento das regras aplicadas na busca."""
    paciente_id: str
    modo: str
    idade: int
    isolamentos: List[str]
    motivos_pcp: List[str]
    compativeis: List[LeitoResponse]
    por_pcp: Optional[RegraCompatibilidadeResponse] = None
    por_sexo: Optional[RegraCompatibilidadeResponse] = None
    por_isolamento: Optional[RegraCompatibilidadeResponse] = None


class LeitoVagoResponse(BaseModel):
    leito_id: str
    codigo_leito: str
    status: str
    is_pcp: bool
    quarto_nome: Optional[str] = None
    compatibilidade: str
    badges: List[str] = []


class SetorLeitosVagosResponse(BaseModel):
    """Leitos vagos de um setor."""
    setor_id: str
    nome_setor: str
    tipo_setor: str
    leitos: List[LeitoVagoResponse]


# ============================================
# RISCOS DE CONTAMINAÇÃO
# ============================================

class DetalheRiscoResponse(BaseModel):
    tipo: str
    mensagem: str
    setor_id: Optional[str] = None
    setor_nome: Optional[str] = None
    quarto_id: Optional[str] = None
    quarto_nome: Optional[str] = None
    leito_id: Optional[str] = None
    leito_codigo: Optional[str] = None


class RiscoPacienteResponse(BaseModel):
    """Riscos de contaminação de um paciente."""
    paciente_id: str
    nome_paciente: str
    sexo: Optional[str] = None
    motivos: List[str]
    detalhes: List[DetalheRiscoResponse]


# ============================================
# REGULAÇÃO
# ============================================

class ConcluirRegulacaoRequest(BaseModel):
    """Dados para concluir uma regulação."""
    leitos_liberar_ids: List[str] = Field(default_factory=list)
    usuario_nome: Optional[str] = None


class FinalizarPedidosUtiRequest(BaseModel):
    usuario_nome: Optional[str] = None
