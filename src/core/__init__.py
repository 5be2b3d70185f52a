"""Core del cliente: dominio, construcción de queries y servicios (sin I/O salvo el transporte)."""
