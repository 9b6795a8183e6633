"""
Paquete Infra de Core.

Contiene infraestructura transversal: filtros de logging.
"""
