"""
Funções de normalização de texto.
"""
from typing import Any
import unicodedata


def texto_limpo(valor: Any) -> str:
    """Converte para string sem espaços nas pontas ('' para None)."""
    if valor is None:
        return ""
    return str(valor).strip()


def remover_acentos(texto: str) -> str:
    """Remove diacríticos mantendo as letras base."""
    decomposto = unicodedata.normalize("NFD", texto)
    return "".join(c for c in decomposto if not unicodedata.combining(c))


def normalizar_texto(valor: Any) -> str:
    """
    Normaliza texto para comparações insensíveis a acentos e caixa.
    
    Examples:
        >>> normalizar_texto("  Higienização ")
        'higienizacao'
        >>> normalizar_texto(None)
        ''
    """
    return remover_acentos(texto_limpo(valor)).lower()


def textos_equivalentes(a: Any, b: Any) -> bool:
    """Compara dois textos ignorando acentos, caixa e espaços nas pontas."""
    return normalizar_texto(a) == normalizar_texto(b)
