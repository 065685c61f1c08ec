import logging
from datetime import date

import pandas as pd
import streamlit as st

from src.calendar_utils import WEEKDAY_NAMES, WEEKDAY_SHORT, month_name, sunday_offset
from src.business_days import count_business_days
from src.config import APP_TITLE, LOG_LEVEL, ORG_NAME
from src.exporter import ExportError, export_file_name, render_month_exports
from src.grid_view import cell_label
from src.holidays import list_holidays
from src.month_grid import DayType, build_month_grid
from src.payment_rules import last_business_day_of_month

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("calendario")

st.set_page_config(page_title=f"{APP_TITLE} - {ORG_NAME}", layout="wide")


def _init_session():
    today = date.today()
    st.session_state.setdefault("cal_year", today.year)
    st.session_state.setdefault("cal_month", today.month)
    st.session_state.setdefault("selected_iso", None)


def _shift_month(delta: int):
    y, m = st.session_state["cal_year"], st.session_state["cal_month"] + delta
    if m < 1:
        y, m = y - 1, 12
    elif m > 12:
        y, m = y + 1, 1
    st.session_state["cal_year"] = y
    st.session_state["cal_month"] = m
    st.session_state["selected_iso"] = None


def _select_day(iso: str):
    st.session_state["selected_iso"] = iso


@st.cache_data(show_spinner="Gerando PDF...")
def _month_exports(year: int, month: int):
    return render_month_exports(year, month)


def _render_info_panel(d, last_bd: int):
    if d is None:
        st.markdown("#### Detalhes do Dia")
        st.caption("Selecione uma data no calendário para visualizar pagamentos e empenhos.")
        st.metric("Pagamento Geral", f"Dia {last_bd}")
        return

    weekday = WEEKDAY_NAMES[sunday_offset(d.date)].lower()
    if weekday not in ("sábado", "domingo"):
        weekday += "-feira"
    st.markdown(f"#### {weekday}, {d.day_of_month} de {month_name(d.date.month)}")

    is_payment = d.type == DayType.PAYMENT_DAY and d.is_current_month
    is_commitment = d.type == DayType.COMMITMENT_DAY and d.is_current_month

    if is_payment:
        st.error(f"💰 **PAGAMENTO**  \n{d.payment_text or 'Pagamento dos Servidores'}")
    elif is_commitment:
        items = [i.strip() for i in (d.commitment_text or "").split(",") if i.strip()]
        st.markdown("📋 **EMPENHO**  \nItens do Empenho:")
        for item in items:
            st.markdown(f"- {item}")
    elif d.type == DayType.HOLIDAY:
        st.warning(f"🎉 **FERIADO**  \n{d.holiday_name}")
    elif d.type == DayType.WEEKEND:
        st.info("**FIM DE SEMANA**")
    else:
        st.info("**DIA ÚTIL**")

    # feriado encoberto por pagamento/empenho continua informado
    if d.holiday_name and d.type != DayType.HOLIDAY and d.is_current_month:
        st.caption(f"Feriado: {d.holiday_name}")

    if not is_payment and not is_commitment:
        st.markdown("---")
        st.caption("PAGAMENTO GERAL · último dia útil do mês")
        st.markdown(f"### :red[{last_bd}]")


_init_session()
year = int(st.session_state["cal_year"])
month = int(st.session_state["cal_month"])

days = build_month_grid(year, month)
last_bd = last_business_day_of_month(year, month)
mname = month_name(month)

# -------------------- CABEÇALHO --------------------
h1, h2, h3, h4 = st.columns([6, 1, 3, 1])
with h1:
    st.title(f"🗓️ {APP_TITLE}")
    st.caption(ORG_NAME)
with h2:
    st.button("◀", key="nav_prev", on_click=_shift_month, args=(-1,))
with h3:
    st.markdown(f"### {mname.capitalize()} {year}")
with h4:
    st.button("▶", key="nav_next", on_click=_shift_month, args=(1,))

left, right = st.columns([2, 1])

# -------------------- CALENDÁRIO --------------------
with left:
    st.subheader("Visão Geral do Mês")
    st.caption("💰 Pagamento · 📋 Empenho · 🎉 Feriado")

    head = st.columns(7)
    for col, wd in zip(head, WEEKDAY_SHORT):
        col.markdown(f"**{wd.upper()}**")

    selected_iso = st.session_state.get("selected_iso")
    today = date.today()
    for week in range(6):
        cols = st.columns(7)
        for col, d in zip(cols, days[week * 7:(week + 1) * 7]):
            iso = d.date.isoformat()
            col.button(
                cell_label(d, today),
                key=f"day_{iso}",
                on_click=_select_day,
                args=(iso,),
                type="primary" if iso == selected_iso else "secondary",
                width="stretch",
            )

    st.markdown("### ⬇️ Baixar Calendário")
    try:
        pdf_bytes, xlsx_bytes = _month_exports(year, month)
    except ExportError:
        logger.exception("Erro ao gerar exportações %04d-%02d", year, month)
        st.error("Erro ao gerar o PDF. Tente novamente.")
    else:
        d1, d2 = st.columns(2)
        d1.download_button(
            "📄 Baixar PDF",
            data=pdf_bytes,
            file_name=export_file_name(year, month, "pdf"),
            mime="application/pdf",
            key="dl_pdf",
        )
        d2.download_button(
            "📊 Baixar Excel (.xlsx)",
            data=xlsx_bytes,
            file_name=export_file_name(year, month, "xlsx"),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key="dl_xlsx",
        )

# -------------------- DETALHES --------------------
with right:
    selected = next((d for d in days if d.date.isoformat() == selected_iso), None)
    _render_info_panel(selected, last_bd)

    st.markdown("---")
    st.markdown("### Resumo")
    st.write(f"**Pagamento geral:** {last_bd} de {mname}")
    st.write(f"**Dias úteis no mês:** {count_business_days(year, month)}")

    hols = list_holidays(year, month)
    if hols:
        st.markdown("### Feriados do mês")
        df_h = pd.DataFrame([{"Data": h.iso, "Feriado": h.name} for h in hols])
        st.dataframe(df_h, width="stretch", hide_index=True)
