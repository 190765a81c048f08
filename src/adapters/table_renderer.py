"""Render HTML del artefacto.

Por qué está en adapters:
- HTML es un detalle de infraestructura (Jinja2).
- El Core solo conoce `TabularData`.

Reglas del split (sin CSV quoting, igual que la herramienta original):
- líneas por `\\n`, campos por `,`;
- un salto de línea final cierra la última línea, no crea una fila vacía.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.errors import ArtifactError
from core.domain.models import TabularData


LINE_DELIMITER = "\n"
FIELD_DELIMITER = ","

PANEL_TITLE = "GDX Viewer"
DOCUMENT_HEADING = "GDX Data Viewer"

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@lru_cache(maxsize=1)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def read_artifact(path: Path, *, encoding: str = "utf-8") -> str:
    """Lee el artefacto completo (segunda pasada, después de que el proceso terminó).

    Sin traducción de saltos de línea: un `\\r` queda dentro del campo.
    """

    try:
        return path.read_bytes().decode(encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactError(path, exc) from exc


def split_rows(text: str) -> TabularData:
    """Parte el texto en filas/campos sin validar ni normalizar."""

    if not text:
        return TabularData()
    lines = text.split(LINE_DELIMITER)
    if lines[-1] == "":
        lines.pop()
    rows = tuple(tuple(line.split(FIELD_DELIMITER)) for line in lines)
    # Campos ya son str; evitamos revalidar datasets grandes celda a celda.
    return TabularData.model_construct(rows=rows)


def render_table_html(data: TabularData, *, heading: str = DOCUMENT_HEADING) -> str:
    """Renderiza un HTML autocontenido con la tabla completa (sin paginar).

    Determinista: mismos datos -> mismo documento, byte a byte.
    """

    template = _get_env().get_template("viewer.html")
    return template.render(
        title=PANEL_TITLE,
        heading=heading,
        header=data.header,
        body=data.body,
    )


def render_artifact(text: str) -> str:
    return render_table_html(split_rows(text))
