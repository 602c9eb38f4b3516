"""
Normalizadores de valores individuais vindos do armazenamento.

Cada função recebe um valor em formato livre e devolve a forma
canônica usada pelo núcleo. Nenhuma delas levanta exceção para
entradas inesperadas.
"""
from typing import Any, Optional
from collections.abc import Mapping
from enum import Enum

from gestao_leitos.models.enums import (
    SexoEnum,
    StatusLeitoEnum,
    TipoSetorEnum,
    STATUS_ISOLAMENTO_ATIVOS,
)
from gestao_leitos.utils.texto import normalizar_texto, texto_limpo


# Sexo assumido quando o cadastro não permite identificar M ou F
SEXO_PADRAO_INDEFINIDO = SexoEnum.FEMININO

_SEXO_MASCULINO = {"m", "masc", "masculino"}
_SEXO_FEMININO = {"f", "fem", "feminino"}
_SEXO_INTERSEXO = {"i", "intersexo", "intersex"}
_SEXO_OUTRO = {"outro", "outros"}

_TIPOS_SETOR_SINONIMOS = {
    "ps": TipoSetorEnum.EMERGENCIA,
    "pronto socorro": TipoSetorEnum.EMERGENCIA,
    "pronto-socorro": TipoSetorEnum.EMERGENCIA,
    "emergencia": TipoSetorEnum.EMERGENCIA,
    "cc": TipoSetorEnum.CENTRO_CIRURGICO,
}


def _valor_bruto(valor: Any) -> Any:
    if isinstance(valor, Enum):
        return valor.value
    return valor


def desembrulhar_referencia(valor: Any) -> Optional[str]:
    """
    Converte uma referência embutida em identificador simples.
    
    Aceita o próprio id, um mapeamento com 'id' ou um objeto com
    atributo 'id' (ponteiro de documento).
    
    Examples:
        >>> desembrulhar_referencia({"id": "L1", "path": "leitos/L1"})
        'L1'
        >>> desembrulhar_referencia("  L1 ")
        'L1'
    """
    valor = _valor_bruto(valor)
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, Mapping):
        return desembrulhar_referencia(valor.get("id"))
    if not isinstance(valor, (str, int, float)) and hasattr(valor, "id"):
        return desembrulhar_referencia(getattr(valor, "id"))
    texto = texto_limpo(valor)
    return texto or None


def normalizar_sexo(valor: Any) -> Optional[str]:
    """
    Normaliza o sexo para exibição (aceita mais de dois valores).
    
    Returns:
        'Masculino', 'Feminino', 'Intersexo', 'Outro', o texto original
        quando não reconhecido, ou None quando vazio
    """
    texto = texto_limpo(_valor_bruto(valor))
    if not texto:
        return None
    
    base = normalizar_texto(texto)
    if base in _SEXO_MASCULINO:
        return "Masculino"
    if base in _SEXO_FEMININO:
        return "Feminino"
    if base in _SEXO_INTERSEXO:
        return "Intersexo"
    if base in _SEXO_OUTRO:
        return "Outro"
    return texto


def normalizar_sexo_binario(valor: Any) -> SexoEnum:
    """
    Normaliza o sexo para o contexto de compatibilidade (somente M/F).
    
    Valores não reconhecidos ou ausentes resultam em SEXO_PADRAO_INDEFINIDO.
    Este é o único ponto do sistema que aplica esse padrão.
    """
    base = normalizar_texto(_valor_bruto(valor))
    if base in _SEXO_MASCULINO:
        return SexoEnum.MASCULINO
    if base in _SEXO_FEMININO:
        return SexoEnum.FEMININO
    return SEXO_PADRAO_INDEFINIDO


def status_isolamento_ativo(status: Any) -> bool:
    """Verifica se o status do isolamento é Confirmado ou Suspeito."""
    return normalizar_texto(_valor_bruto(status)) in STATUS_ISOLAMENTO_ATIVOS


def normalizar_status_isolamento(status: Any) -> Optional[str]:
    """Rótulo canônico do status de isolamento ('Confirmado', 'Suspeito', ...)."""
    texto = texto_limpo(_valor_bruto(status))
    if not texto:
        return None
    base = normalizar_texto(texto)
    if base in STATUS_ISOLAMENTO_ATIVOS:
        return base.capitalize()
    return texto


def normalizar_status_leito(status: Any) -> str:
    """
    Normaliza o status do leito para o valor do enum quando reconhecido.
    
    Examples:
        >>> normalizar_status_leito("HIGIENIZACAO")
        'Higienização'
    """
    texto = texto_limpo(_valor_bruto(status))
    base = normalizar_texto(texto)
    for item in StatusLeitoEnum:
        if normalizar_texto(item.value) == base:
            return item.value
    return texto


def normalizar_tipo_setor(tipo: Any) -> str:
    """Normaliza o tipo de setor; vazio resulta em 'Outros'."""
    texto = texto_limpo(_valor_bruto(tipo))
    if not texto:
        return TipoSetorEnum.OUTROS.value
    
    base = normalizar_texto(texto)
    for item in TipoSetorEnum:
        if normalizar_texto(item.value) == base:
            return item.value
    if base in _TIPOS_SETOR_SINONIMOS:
        return _TIPOS_SETOR_SINONIMOS[base].value
    return texto
