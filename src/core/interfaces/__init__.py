"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos
  (runner de gdxdump, host CLI/IDE).
- Permite invertir dependencias: el Core depende de abstracciones.
"""
