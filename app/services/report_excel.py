"""
Excel report renderers.

Pure functions: comparison rows or history entries in, .xlsx bytes out.
A title/summary block sits above the data table.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from app.core.config import settings
from app.schemas.price import ComparisonRow, HistoryEntry
from app.services import report_common as fmt

logger = logging.getLogger(__name__)


def _write_workbook(
    sheet_name: str,
    preamble: List[Tuple],
    headers: List[str],
    body: List[List[str]],
    col_widths: List[int],
) -> bytes:
    """Preamble rows (title, summary) followed by the table starting one row below them"""
    buffer = BytesIO()
    table_start = len(preamble) + 1

    df = pd.DataFrame(body, columns=headers)
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False, startrow=table_start)
        worksheet = writer.sheets[sheet_name]

        for row_idx, values in enumerate(preamble, start=1):
            for col_idx, value in enumerate(values, start=1):
                worksheet.cell(row=row_idx, column=col_idx, value=value)
        worksheet.cell(row=1, column=1).font = Font(bold=True, size=14)

        for col_idx, width in enumerate(col_widths, start=1):
            worksheet.column_dimensions[get_column_letter(col_idx)].width = width

    return buffer.getvalue()


def generate_comparison_excel(
    rows: Sequence[ComparisonRow],
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Comparison matrix as a single 'Comparação' sheet"""
    generated_at = generated_at or datetime.now()

    preamble = [
        (f"{settings.REPORT_COMPANY_NAME} - Relatório de Comparação de Preços",),
        (fmt.generated_at_line(generated_at),),
        (),
        ("Resumo Executivo",),
        ("Total de Produtos", len(rows)),
        ("Preço Médio Geral", fmt.format_currency(fmt.overall_average(rows))),
        ("Data do Relatório", fmt.format_date(generated_at)),
    ]
    headers = fmt.comparison_headers(rows)
    body = fmt.comparison_table(rows)
    widths = [25] + [15] * (len(headers) - 2) + [18]

    logger.info(f"Comparison Excel generated with {len(body)} products")
    return _write_workbook("Comparação", preamble, headers, body, widths)


def generate_history_excel(
    entries: Sequence[HistoryEntry],
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Price history as a single 'Histórico' sheet"""
    generated_at = generated_at or datetime.now()

    preamble = [
        (f"{settings.REPORT_COMPANY_NAME} - Relatório de Histórico de Preços",),
        (fmt.generated_at_line(generated_at),),
        (),
        ("Resumo Executivo",),
        ("Total de Alterações", len(entries)),
        ("Período", fmt.history_period(entries)),
    ]
    body = fmt.history_table(entries)

    logger.info(f"History Excel generated with {len(body)} entries")
    return _write_workbook("Histórico", preamble, fmt.HISTORY_HEADERS, body, [25, 20, 18, 15, 15, 20])
