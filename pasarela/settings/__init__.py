"""
Settings de la pasarela.

Módulos de entrada:
- production: configuración completa leída del entorno
- test: valores seguros para la suite de pytest
"""
