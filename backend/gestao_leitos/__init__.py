"""
Gestão de Leitos.
Núcleo de compatibilidade de leitos, coortes de isolamento e regulação.
"""
__version__ = "1.0.0"
