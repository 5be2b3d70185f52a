"""Servicios: fachada de la API y árbol de taxonomías."""
