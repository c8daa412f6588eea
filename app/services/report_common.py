"""
Formatting shared by the PDF and Excel report renderers (pt-BR conventions).
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence

from app.models.price import CHANGE_CREATED, CHANGE_UPDATED, CHANGE_DELETED
from app.schemas.price import ComparisonRow, HistoryEntry
from app.services.comparison_repository import average_of

PLACEHOLDER = "-"

CHANGE_LABELS = {
    CHANGE_CREATED: "Criado",
    CHANGE_UPDATED: "Atualizado",
    CHANGE_DELETED: "Removido",
}

COMPARISON_FIXED_HEADERS = ["Produto"]
COMPARISON_TRAILING_HEADERS = ["Média", "Última Atualização"]
HISTORY_HEADERS = ["Produto", "Concorrente", "Tipo", "Valor Anterior", "Novo Valor", "Data e Hora"]

DEFAULT_COMPETITOR_NAMES = ["Dinho", "Adega Brasil", "Franco", "Diversos"]


def format_currency(value) -> str:
    """12.9 -> 'R$ 12,90'; None -> '-'"""
    if value is None or value == "":
        return PLACEHOLDER
    amount = Decimal(str(value)).quantize(Decimal("0.01"))
    integer, _, cents = f"{amount:,.2f}".partition(".")
    return f"R$ {integer.replace(',', '.')},{cents}"


def format_date(value: Optional[datetime]) -> str:
    return value.strftime("%d/%m/%Y") if value else PLACEHOLDER


def format_datetime(value: Optional[datetime]) -> str:
    return value.strftime("%d/%m/%Y %H:%M") if value else PLACEHOLDER


def generated_at_line(generated_at: datetime) -> str:
    return f"Gerado em: {generated_at.strftime('%d/%m/%Y')} às {generated_at.strftime('%H:%M:%S')}"


def competitor_headers(rows: Sequence[ComparisonRow]) -> List[str]:
    """Competitor column titles, in the order the rows carry them"""
    if rows:
        return [cell.competitor_name for cell in rows[0].prices]
    return list(DEFAULT_COMPETITOR_NAMES)


def comparison_headers(rows: Sequence[ComparisonRow]) -> List[str]:
    return COMPARISON_FIXED_HEADERS + competitor_headers(rows) + COMPARISON_TRAILING_HEADERS


def comparison_table(rows: Sequence[ComparisonRow]) -> List[List[str]]:
    """Body rows: product, one price per competitor, average, last update date"""
    table = []
    for row in rows:
        table.append(
            [row.name]
            + [format_currency(cell.value) for cell in row.prices]
            + [format_currency(row.average), format_date(row.last_updated)]
        )
    return table


def overall_average(rows: Sequence[ComparisonRow]) -> Optional[str]:
    """Mean of the product averages, over products that have any price"""
    return average_of(Decimal(row.average) for row in rows if row.average is not None)


def history_new_value(entry: HistoryEntry) -> str:
    # Deletions carry no new value; legacy rows may hold a 0 there
    if entry.change_type == CHANGE_DELETED:
        return PLACEHOLDER
    return format_currency(entry.new_value)


def history_table(entries: Sequence[HistoryEntry]) -> List[List[str]]:
    return [
        [
            entry.product_name or PLACEHOLDER,
            entry.competitor_name or PLACEHOLDER,
            CHANGE_LABELS.get(entry.change_type, entry.change_type),
            format_currency(entry.previous_value),
            history_new_value(entry),
            format_datetime(entry.changed_at),
        ]
        for entry in entries
    ]


def history_period(entries: Sequence[HistoryEntry]) -> str:
    """'dd/mm/yyyy a dd/mm/yyyy' spanning the entries, 'N/A' when empty"""
    if not entries:
        return "N/A"
    moments = [entry.changed_at for entry in entries]
    return f"{format_date(min(moments))} a {format_date(max(moments))}"


def export_filename(prefix: str, extension: str, generated_at: datetime) -> str:
    return f"{prefix}-{generated_at.strftime('%Y-%m-%d')}.{extension}"
