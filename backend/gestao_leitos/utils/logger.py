"""
Configuração de logging do sistema.
"""
import logging
from gestao_leitos.config import settings


def configurar_logging(nivel: str = None) -> logging.Logger:
    """
    Configura e retorna o logger principal do sistema.
    
    Args:
        nivel: Nível de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    
    Returns:
        Logger configurado
    """
    if nivel is None:
        nivel = settings.LOG_LEVEL
    
    nivel_num = getattr(logging, nivel.upper(), logging.INFO)
    
    formato = logging.Formatter(
        settings.LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formato)
    
    logger = logging.getLogger('gestao_leitos')
    logger.setLevel(nivel_num)
    
    # Evita handlers duplicados
    if not logger.handlers:
        logger.addHandler(console_handler)
    
    return logger
