"""
Infraestrutura: banco de dados e exceções.
"""
