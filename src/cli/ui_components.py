"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import TabularData


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (pipelines).
    """

    title = Text("GDX Viewer", style="bold cyan")
    subtitle = Text("gdxdump • CSV • HTML", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_preview_table(data: TabularData, *, limit: int) -> Table:
    """Vista previa en terminal de las primeras `limit` filas del cuerpo.

    Rich necesita un ancho fijo de columnas: las filas irregulares se
    completan con celdas vacías solo aquí, el HTML las deja como vienen.
    """

    shown = data.body[:limit]
    width = max([len(data.header), *(len(row) for row in shown)], default=0)

    table = Table(title=f"Preview ({len(shown)} of {len(data.body)} rows)")
    header = list(data.header) + [""] * (width - len(data.header))
    for name in header:
        table.add_column(name, style="white")
    for row in shown:
        table.add_row(*row, *([""] * (width - len(row))))
    return table
