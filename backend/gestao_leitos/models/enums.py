"""
Enumerações do sistema.
Centralizadas para evitar imports circulares.
"""
from enum import Enum


class SexoEnum(str, Enum):
    """Sexo do paciente no contexto de compatibilidade de leitos."""
    MASCULINO = "M"
    FEMININO = "F"


class StatusLeitoEnum(str, Enum):
    """Status de um leito."""
    VAGO = "Vago"
    HIGIENIZACAO = "Higienização"
    OCUPADO = "Ocupado"
    REGULADO = "Regulado"
    RESERVADO = "Reservado"
    BLOQUEADO = "Bloqueado"


class TipoSetorEnum(str, Enum):
    """Tipo de setor hospitalar."""
    ENFERMARIA = "Enfermaria"
    UTI = "UTI"
    EMERGENCIA = "Emergência"
    CENTRO_CIRURGICO = "Centro Cirúrgico"
    OUTROS = "Outros"


class ModoBuscaEnum(str, Enum):
    """Nível de cuidado solicitado na busca de leitos."""
    ENFERMARIA = "enfermaria"
    UTI = "uti"


class TipoRiscoEnum(str, Enum):
    """Motivo de risco de contaminação cruzada."""
    SETOR_ABERTO = "setor_aberto"
    FALTA_COORTE = "falta_coorte"
    COORTE_INCOMPATIVEL = "coorte_incompativel"


class StatusRegulacaoEnum(str, Enum):
    """Status terminal de uma regulação no histórico."""
    CONCLUIDA = "Concluída"
    CANCELADA = "Cancelada"


# ============================================
# CONSTANTES RELACIONADAS AOS ENUMS
# ============================================

# Status em que o leito pode receber um paciente
STATUS_LEITO_DISPONIVEL = frozenset({
    StatusLeitoEnum.VAGO.value,
    StatusLeitoEnum.HIGIENIZACAO.value,
})

# Status que contam como leito ocupado para cálculo de coorte
STATUS_LEITO_OCUPADO = frozenset({
    StatusLeitoEnum.OCUPADO.value,
    StatusLeitoEnum.REGULADO.value,
})

# Status de isolamento considerados ativos (comparados sem acento/caixa)
STATUS_ISOLAMENTO_ATIVOS = frozenset({"confirmado", "suspeito"})

# Tipo de setor alvo para cada modo de busca
TIPO_SETOR_POR_MODO = {
    ModoBuscaEnum.ENFERMARIA: TipoSetorEnum.ENFERMARIA,
    ModoBuscaEnum.UTI: TipoSetorEnum.UTI,
}
