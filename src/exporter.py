# src/exporter.py
from __future__ import annotations

import io
import logging
import textwrap
from datetime import date
from typing import List, Optional, Tuple

import pandas as pd
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from src.calendar_utils import WEEKDAY_NAMES, month_name, sunday_offset
from src.config import EXPORT_PREFIX, ORG_NAME
from src.month_grid import CalendarDay, DayType, build_month_grid
from src.payment_rules import last_business_day_of_month

logger = logging.getLogger(__name__)

TYPE_LABELS = {
    DayType.BUSINESS_DAY: "Dia Útil",
    DayType.WEEKEND: "Fim de Semana",
    DayType.HOLIDAY: "Feriado",
    DayType.PAYMENT_DAY: "Pagamento",
    DayType.COMMITMENT_DAY: "Empenho",
}

# A4 retrato, em mm
PAGE_W, PAGE_H = 210.0, 297.0
MM_PER_INCH = 25.4
MARGIN = 15.0
GRID_TOP = 40.0
HEADER_H = 8.0
ROW_H = 30.0

COLOR_PAYMENT_BG, COLOR_PAYMENT_EDGE, COLOR_PAYMENT_TEXT = "#FEE2E2", "#FCA5A5", "#991B1B"
COLOR_COMMIT_BG, COLOR_COMMIT_EDGE, COLOR_COMMIT_TEXT = "#FAF5FF", "#E9D5FF", "#6B21A8"
COLOR_HOLIDAY = "#D97706"
COLOR_MUTED_BG = "#F9FAFB"
COLOR_BORDER = "#D1D5DB"


class ExportError(Exception):
    pass


def export_file_name(year: int, month: int, ext: str) -> str:
    return f"{EXPORT_PREFIX}-{month_name(month)}-{year}.{ext}"


def grid_to_dataframe(days: List[CalendarDay]) -> "pd.DataFrame":
    """Uma linha por dia do mês (sem os dias de preenchimento)."""
    rows = []
    for d in days:
        if not d.is_current_month:
            continue
        rows.append({
            "Data": d.date.isoformat(),
            "Dia": d.day_of_month,
            "Dia da semana": WEEKDAY_NAMES[sunday_offset(d.date)],
            "Tipo": TYPE_LABELS[d.type],
            "Feriado": d.holiday_name or "",
            "Pagamento": d.payment_text or "",
            "Empenho": d.commitment_text or "",
        })
    return pd.DataFrame(rows, columns=["Data", "Dia", "Dia da semana", "Tipo", "Feriado", "Pagamento", "Empenho"])


def export_month_xlsx(days: List[CalendarDay], year: int, month: int, sheet_name: str = "Calendario") -> bytes:
    """
    Grava o mês em Excel e devolve bytes.
    app.py entrega isso via st.download_button.
    """
    from openpyxl.styles import Alignment, Font
    from openpyxl.utils import get_column_letter

    df = grid_to_dataframe(days)
    xlsx_buf = io.BytesIO()
    try:
        with pd.ExcelWriter(xlsx_buf, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=sheet_name)
            ws = writer.sheets[sheet_name]

            # Cabeçalho em negrito + centralizado
            header_font = Font(bold=True)
            for cell in ws[1]:
                cell.font = header_font
                cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

            for row in ws.iter_rows(min_row=2):
                for cell in row:
                    cell.alignment = Alignment(vertical="center", wrap_text=True)

            # Largura das colunas
            for col_idx, col in enumerate(ws.columns, start=1):
                max_len = 10
                for cell in col:
                    v = "" if cell.value is None else str(cell.value)
                    max_len = max(max_len, len(v))
                ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 40)

            ws.freeze_panes = "A2"
    except Exception as e:
        raise ExportError(f"Falha ao gerar Excel de {year}-{month:02d}") from e

    logger.info("Excel gerado: %04d-%02d (%d dias)", year, month, len(df))
    return xlsx_buf.getvalue()


def _wrap(text: str, width: int, max_lines: Optional[int] = None) -> str:
    lines = textwrap.wrap(text, width=width) or [""]
    if max_lines is not None and len(lines) > max_lines:
        lines = lines[:max_lines]
        lines[-1] = lines[-1].rstrip(" ,") + "…"
    return "\n".join(lines)


def _draw_label_box(ax, x, y, w, h, text, bg, edge, color, size, bold=True, max_lines=None):
    ax.add_patch(Rectangle((x, y), w, h, facecolor=bg, edgecolor=edge, linewidth=0.6))
    ax.text(
        x + w / 2, y + h / 2, _wrap(text.upper(), 20, max_lines),
        ha="center", va="center", fontsize=size, color=color,
        fontweight="bold" if bold else "semibold", linespacing=1.1,
    )


def _draw_cell(ax, d: CalendarDay, x: float, y: float, w: float):
    muted = (not d.is_current_month) or d.type == DayType.WEEKEND
    ax.add_patch(Rectangle(
        (x, y), w, ROW_H,
        facecolor=COLOR_MUTED_BG if muted else "white",
        edgecolor=COLOR_BORDER, linewidth=0.6,
    ))
    ax.text(
        x + 2, y + 2, str(d.day_of_month), ha="left", va="top", fontsize=9,
        color="#9CA3AF" if not d.is_current_month else "#1F2937",
        fontweight="bold" if d.day_of_month == 1 else "normal",
    )

    if d.type == DayType.HOLIDAY and d.holiday_name:
        ax.text(
            x + 2, y + 8, _wrap(d.holiday_name.upper(), 22, 2), ha="left", va="top",
            fontsize=5, color=COLOR_HOLIDAY, fontweight="bold",
        )

    if not d.is_current_month:
        return

    box_w, box_h = w - 3, 9.0
    box_x, box_y = x + 1.5, y + ROW_H - box_h - 1.5
    if d.type == DayType.PAYMENT_DAY:
        _draw_label_box(
            ax, box_x, box_y, box_w, box_h, d.payment_text or "Pagamento",
            COLOR_PAYMENT_BG, COLOR_PAYMENT_EDGE, COLOR_PAYMENT_TEXT, 5.5,
        )
    elif d.type == DayType.COMMITMENT_DAY:
        _draw_label_box(
            ax, box_x, box_y, box_w, box_h, d.commitment_text or "",
            COLOR_COMMIT_BG, COLOR_COMMIT_EDGE, COLOR_COMMIT_TEXT, 5, bold=False, max_lines=2,
        )


def build_printable_figure(
    days: List[CalendarDay], year: int, month: int, last_business_day: int,
    generated_on: Optional[date] = None,
) -> Figure:
    """
    Página A4 com cabeçalho, grid 6x7, legenda e resumo.
    Coordenadas em mm, origem no canto superior esquerdo.
    """
    generated_on = generated_on or date.today()
    mname = month_name(month)

    fig = Figure(figsize=(PAGE_W / MM_PER_INCH, PAGE_H / MM_PER_INCH), facecolor="white")
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, PAGE_W)
    ax.set_ylim(PAGE_H, 0)
    ax.axis("off")

    # Cabeçalho
    ax.text(MARGIN, 20, "CALENDÁRIO DE PAGAMENTOS", fontsize=17, fontweight="bold", color="#111827", va="bottom")
    ax.text(MARGIN, 27, ORG_NAME, fontsize=8, color="#4B5563", va="bottom")
    ax.text(PAGE_W - MARGIN, 20, f"{mname.capitalize()} {year}", fontsize=15, fontweight="bold",
            color="#1F2937", ha="right", va="bottom")
    ax.text(PAGE_W - MARGIN, 27, f"Gerado em {generated_on.strftime('%d/%m/%Y')}", fontsize=6,
            color="#6B7280", ha="right", va="bottom")
    ax.plot([MARGIN, PAGE_W - MARGIN], [32, 32], color="#1F2937", linewidth=1.5)

    # Grid
    col_w = (PAGE_W - 2 * MARGIN) / 7
    for i, name in enumerate(WEEKDAY_NAMES):
        x = MARGIN + i * col_w
        ax.add_patch(Rectangle((x, GRID_TOP), col_w, HEADER_H, facecolor="#F3F4F6",
                               edgecolor=COLOR_BORDER, linewidth=0.6))
        ax.text(x + col_w / 2, GRID_TOP + HEADER_H / 2, name.upper(), ha="center", va="center",
                fontsize=6.5, fontweight="bold", color="#374151")

    cells_top = GRID_TOP + HEADER_H
    for idx, d in enumerate(days):
        row, col = divmod(idx, 7)
        _draw_cell(ax, d, MARGIN + col * col_w, cells_top + row * ROW_H, col_w)

    # Legenda / Resumo
    box_top = cells_top + 6 * ROW_H + 8
    box_w = (PAGE_W - 2 * MARGIN - 8) / 2
    for x, title in ((MARGIN, "LEGENDA"), (MARGIN + box_w + 8, "RESUMO")):
        ax.add_patch(Rectangle((x, box_top), box_w, 34, facecolor=COLOR_MUTED_BG,
                               edgecolor="#E5E7EB", linewidth=0.6))
        ax.text(x + 4, box_top + 6, title, fontsize=8, fontweight="bold", color="#374151")

    lx = MARGIN + 4
    ax.add_patch(Rectangle((lx, box_top + 10), 4, 4, facecolor=COLOR_PAYMENT_BG, edgecolor=COLOR_PAYMENT_EDGE))
    ax.text(lx + 6, box_top + 12, "Dia de Pagamento (Vermelho)", fontsize=6.5, va="center", color="#374151")
    ax.add_patch(Rectangle((lx, box_top + 17), 4, 4, facecolor=COLOR_COMMIT_BG, edgecolor=COLOR_COMMIT_EDGE))
    ax.text(lx + 6, box_top + 19, "Dia de Empenho", fontsize=6.5, va="center", color="#374151")
    ax.text(lx, box_top + 26, "NOME DO FERIADO", fontsize=6.5, fontweight="bold", va="center", color=COLOR_HOLIDAY)
    ax.text(lx + 27, box_top + 26, "Feriado Nacional/Facultativo", fontsize=6.5, va="center", color="#374151")

    sx = MARGIN + box_w + 12
    ax.text(sx, box_top + 13, "O pagamento geral dos servidores será realizado no dia:",
            fontsize=6.5, color="#4B5563", va="center")
    ax.text(sx, box_top + 22, f"{last_business_day} de {mname}", fontsize=14, fontweight="bold",
            color="#DC2626", va="center")

    ax.text(PAGE_W / 2, PAGE_H - 8,
            "Documento gerado automaticamente. Verifique as datas oficiais no diário oficial.",
            ha="center", fontsize=6, color="#9CA3AF")
    return fig


def export_month_pdf(
    days: List[CalendarDay], year: int, month: int, last_business_day: int,
    generated_on: Optional[date] = None,
) -> bytes:
    buf = io.BytesIO()
    try:
        fig = build_printable_figure(days, year, month, last_business_day, generated_on)
        fig.savefig(buf, format="pdf")
    except Exception as e:
        raise ExportError(f"Falha ao gerar PDF de {year}-{month:02d}") from e

    logger.info("PDF gerado: %s", export_file_name(year, month, "pdf"))
    return buf.getvalue()


def render_month_exports(year: int, month: int) -> Tuple[bytes, bytes]:
    """(pdf, xlsx) do mês; depende só de (year, month), então app.py pode cachear."""
    days = build_month_grid(year, month)
    pdf = export_month_pdf(days, year, month, last_business_day_of_month(year, month))
    xlsx = export_month_xlsx(days, year, month)
    return pdf, xlsx
