"""Construcción de texto GraphQL.

- `selection`: selection sets a partir de texto o árboles de campos.
- `arguments`: filtros y `sortBy`.
- `queries`: documentos completos por operación.
"""
