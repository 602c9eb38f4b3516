"""
Funções de conversão e cálculo de datas.

Os registros chegam do armazenamento com datas em vários formatos
(datetime nativo, timestamp com segundos, 'dd/mm/aaaa', ISO 8601).
Todas as conversões retornam datetime ingênuo em UTC.
"""
from typing import Any, Optional, Union
from datetime import date, datetime, timezone
from collections.abc import Mapping
import re

from gestao_leitos.utils.texto import texto_limpo


# Idade atribuída quando a data de nascimento é ausente ou inválida
IDADE_DESCONHECIDA = 0

# 'dd/mm/aaaa', opcionalmente seguido de horário
_DATA_BRASILEIRA = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})(?:$|\s)")


def agora_utc() -> datetime:
    """Data/hora atual em UTC (sem tzinfo)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _de_epoch(segundos: Union[int, float]) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(segundos, tz=timezone.utc).replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        return None


def _de_texto(texto: str) -> Optional[datetime]:
    if not texto:
        return None
    
    if "/" in texto:
        # Apenas a data inicial conta; um horário após ela é ignorado
        encontrada = _DATA_BRASILEIRA.match(texto)
        if not encontrada:
            return None
        dia, mes, ano = (int(parte) for parte in encontrada.groups())
        try:
            return datetime(ano, mes, dia)
        except ValueError:
            return None
    
    if texto.endswith("Z"):
        texto = texto[:-1] + "+00:00"
    try:
        return normalizar_data(datetime.fromisoformat(texto))
    except ValueError:
        return None


def normalizar_data(valor: Any) -> Optional[datetime]:
    """
    Converte um valor de data em datetime UTC ingênuo.
    
    Aceita:
    - datetime (com ou sem tzinfo) e date
    - mapeamento ou objeto com 'seconds' (timestamp do armazenamento)
    - número (segundos desde a época Unix)
    - texto 'dd/mm/aaaa' (com ou sem horário) ou ISO 8601
    
    Returns:
        datetime ou None se o valor não puder ser interpretado
    """
    if valor is None or isinstance(valor, bool):
        return None
    
    if isinstance(valor, datetime):
        if valor.tzinfo is not None:
            return valor.astimezone(timezone.utc).replace(tzinfo=None)
        return valor
    
    if isinstance(valor, date):
        return datetime(valor.year, valor.month, valor.day)
    
    if isinstance(valor, (int, float)):
        return _de_epoch(valor)
    
    if isinstance(valor, str):
        return _de_texto(texto_limpo(valor))
    
    if isinstance(valor, Mapping):
        segundos = valor.get("seconds", valor.get("_seconds"))
    else:
        segundos = getattr(valor, "seconds", None)
    
    if isinstance(segundos, (int, float)) and not isinstance(segundos, bool):
        return _de_epoch(segundos)
    
    return None


def calcular_idade(data_nascimento: Any, referencia: Optional[date] = None) -> int:
    """
    Calcula a idade em anos completos.
    
    Args:
        data_nascimento: Data de nascimento em qualquer formato aceito
            por normalizar_data
        referencia: Data de referência (padrão: hoje)
    
    Returns:
        Idade em anos ou IDADE_DESCONHECIDA se a data for inválida
    """
    nascimento = normalizar_data(data_nascimento)
    if nascimento is None:
        return IDADE_DESCONHECIDA
    
    if referencia is None:
        referencia = agora_utc().date()
    elif isinstance(referencia, datetime):
        referencia = referencia.date()
    
    idade = referencia.year - nascimento.year
    if (referencia.month, referencia.day) < (nascimento.month, nascimento.day):
        idade -= 1
    return idade


def diferenca_em_minutos(fim: datetime, inicio: Any) -> Optional[int]:
    """
    Minutos completos entre inicio e fim.
    
    Returns:
        Minutos (truncados em direção a zero) ou None se inicio for inválido
    """
    inicio_dt = normalizar_data(inicio)
    fim_dt = normalizar_data(fim)
    if inicio_dt is None or fim_dt is None:
        return None
    return int((fim_dt - inicio_dt).total_seconds() / 60)
