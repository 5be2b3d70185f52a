"""Interfaces/abstracciones del Core.

- Define contratos (Protocol) que implementan adaptadores concretos.
- El Core depende de la abstracción del transporte, no de httpx.
"""
