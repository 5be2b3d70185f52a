"""Modelos y entidades del dominio.

- Aquí viven las estructuras de datos puras e inmutables (Pydantic v2).
- El dominio no conoce HTTP ni CLI: solo contenido, taxonomías y marcadores.
"""
