"""Fixed-width table rendering."""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence


@dataclass
class Column:
    """One table column: header, width and how to read the cell value."""
    header: str
    width: int
    accessor: Callable[[Any], Any]
    align: str = "left"
    blank_zero: bool = False  # 0 means "no data" for averages
    fmt: Callable[[Any], str] = str

    def cell(self, item: Any) -> str:
        value = self.accessor(item)
        if value is None or (self.blank_zero and value == 0):
            text = ""
        else:
            text = self.fmt(value)
        return self.pad(text)

    def pad(self, text: str) -> str:
        if self.align == "right":
            return text.rjust(self.width)
        return text.ljust(self.width)


def _row(cells: List[str]) -> str:
    return "|" + "|".join(cells) + "|"


def render_table(
    items: Sequence[Any],
    columns: Sequence[Column],
    noun: str,
    limit: Optional[int] = None,
) -> str:
    """Render items as a table with header, dash separator and total line."""
    shown = items if limit is None else items[:limit]
    lines = [
        _row([col.pad(col.header) for col in columns]),
        _row(["-" * col.width for col in columns]),
    ]
    lines.extend(_row([col.cell(item) for col in columns]) for item in shown)
    lines.append("")
    lines.append(f"Total: {len(items)} {noun}")
    return "\n".join(lines)


def format_int(value: float) -> str:
    return str(int(value))
