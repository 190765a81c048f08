"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los adaptadores (runner, renderer, host) intercambian estos modelos y nada más.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
- No hay tipado de columnas: gdxdump decide filas y columnas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class FileFilter(BaseModel):
    """Filtro del diálogo de apertura (nombre visible + extensiones).

    `*` como extensión significa "cualquier archivo".
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Etiqueta visible del filtro (p.ej. 'GDX Files').",
    )
    extensions: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Extensiones sin punto; '*' acepta cualquier archivo.",
    )


class TabularData(BaseModel):
    """Contenido del artefacto partido en filas y campos.

    Por qué existe:
    - Separa el split de texto del render HTML (testeable por separado).
    - La fila 0 es la cabecera; el resto es el cuerpo. Las filas irregulares
      (más o menos campos que la cabecera) se conservan tal cual.
    """

    model_config = ConfigDict(frozen=True)

    rows: tuple[tuple[str, ...], ...] = Field(
        default_factory=tuple,
        description="Filas en orden de aparición; cada una, sus campos en orden.",
    )

    @property
    def header(self) -> tuple[str, ...]:
        return self.rows[0] if self.rows else ()

    @property
    def body(self) -> tuple[tuple[str, ...], ...]:
        return self.rows[1:]

    @property
    def is_empty(self) -> bool:
        return not self.rows


def build_file_filters(extensions: list[str] | tuple[str, ...]) -> tuple[FileFilter, ...]:
    """Filtros del diálogo: las extensiones GDX primero y 'All Files' como fallback."""

    cleaned = tuple(ext.strip().lstrip(".") for ext in extensions if ext.strip().lstrip("."))
    filters: list[FileFilter] = []
    if cleaned:
        filters.append(FileFilter(name="GDX Files", extensions=cleaned))
    filters.append(FileFilter(name="All Files", extensions=("*",)))
    return tuple(filters)
