"""
PDF report renderers.

Pure functions: comparison rows or history entries in, PDF bytes out.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from app.core.config import settings
from app.schemas.price import ComparisonRow, HistoryEntry
from app.services import report_common as fmt

logger = logging.getLogger(__name__)

MARGIN = 40


def _styles():
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Heading1'],
        fontSize=22,
        alignment=1,  # centered
        spaceAfter=6,
    )
    subtitle_style = ParagraphStyle(
        'ReportSubtitle',
        parent=styles['Heading2'],
        fontSize=14,
        alignment=1,
        spaceAfter=4,
    )
    centered_style = ParagraphStyle('Centered', parent=styles['Normal'], alignment=1)
    return styles, title_style, subtitle_style, centered_style


def _table(data: List[List[str]], col_widths: List[float]) -> Table:
    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#333333')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 9),
        ('FONTSIZE', (0, 1), (-1, -1), 8),
        ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
        ('ALIGN', (0, 0), (0, -1), 'LEFT'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F2F2F2')]),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    return table


def _footer(canvas, doc):
    canvas.saveState()
    canvas.setFont('Helvetica', 8)
    canvas.setFillColor(colors.HexColor('#666666'))
    canvas.drawCentredString(
        doc.pagesize[0] / 2,
        20,
        f"Relatório confidencial - {settings.REPORT_COMPANY_NAME}  |  Página {doc.page}",
    )
    canvas.restoreState()


def _build(story: list, pagesize) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=pagesize,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=settings.REPORT_COMPANY_NAME,
    )
    doc.build(story, onFirstPage=_footer, onLaterPages=_footer)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes


def _header(story: list, subtitle: str, generated_at: datetime) -> None:
    styles, title_style, subtitle_style, centered_style = _styles()
    story.append(Paragraph(escape(settings.REPORT_COMPANY_NAME), title_style))
    story.append(Paragraph(escape(subtitle), subtitle_style))
    story.append(Paragraph(escape(fmt.generated_at_line(generated_at)), centered_style))
    story.append(Spacer(1, 0.2 * inch))
    story.append(Paragraph("Resumo Executivo", styles['Heading3']))


def _cell(text: str, style) -> Paragraph:
    return Paragraph(escape(text), style)


def generate_comparison_pdf(
    rows: Sequence[ComparisonRow],
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Comparison matrix: product, one price per competitor, average, last update"""
    generated_at = generated_at or datetime.now()
    styles = getSampleStyleSheet()
    small = ParagraphStyle('Cell', parent=styles['Normal'], fontSize=8, leading=10)

    story = []
    _header(story, "Relatório de Comparação de Preços", generated_at)
    story.append(Paragraph(f"Total de Produtos: {len(rows)}", styles['Normal']))
    story.append(Paragraph(
        f"Preço Médio Geral: {escape(fmt.format_currency(fmt.overall_average(rows)))}", styles['Normal']
    ))
    story.append(Paragraph(f"Data do Relatório: {fmt.format_date(generated_at)}", styles['Normal']))
    story.append(Spacer(1, 0.25 * inch))

    headers = fmt.comparison_headers(rows)
    body = fmt.comparison_table(rows)
    # Product names wrap instead of overflowing the first column
    data = [headers] + [[_cell(r[0], small)] + r[1:] for r in body]

    pagesize = landscape(A4)
    usable = pagesize[0] - 2 * MARGIN
    other = (usable * 0.75) / (len(headers) - 1)
    story.append(_table(data, [usable * 0.25] + [other] * (len(headers) - 1)))

    if not body:
        story.append(Spacer(1, 0.2 * inch))
        story.append(Paragraph("Nenhum produto cadastrado.", styles['Italic']))

    logger.info(f"Comparison PDF generated with {len(body)} products")
    return _build(story, pagesize)


def generate_history_pdf(
    entries: Sequence[HistoryEntry],
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Price history: product, competitor, change kind, previous/new value, timestamp"""
    generated_at = generated_at or datetime.now()
    styles = getSampleStyleSheet()
    small = ParagraphStyle('Cell', parent=styles['Normal'], fontSize=8, leading=10)

    story = []
    _header(story, "Relatório de Histórico de Preços", generated_at)
    story.append(Paragraph(f"Total de Alterações: {len(entries)}", styles['Normal']))
    story.append(Paragraph(f"Período: {fmt.history_period(entries)}", styles['Normal']))
    story.append(Spacer(1, 0.25 * inch))

    body = fmt.history_table(entries)
    data = [fmt.HISTORY_HEADERS] + [[_cell(r[0], small), _cell(r[1], small)] + r[2:] for r in body]

    pagesize = A4
    usable = pagesize[0] - 2 * MARGIN
    widths = [0.24, 0.18, 0.12, 0.15, 0.15, 0.16]
    story.append(_table(data, [usable * w for w in widths]))

    if not body:
        story.append(Spacer(1, 0.2 * inch))
        story.append(Paragraph("Nenhuma alteração no período.", styles['Italic']))

    logger.info(f"History PDF generated with {len(body)} entries")
    return _build(story, pagesize)
