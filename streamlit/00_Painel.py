# streamlit/00_Painel.py
import pandas as pd
import plotly.express as px
import streamlit as st

from agrorain.services.stats import compute_dashboard_stats, last_30_days_series
from session import get_state, live_updates, reload_button, render_banner

st.set_page_config(page_title="AgroRain – Painel Geral", page_icon="🌧️", layout="wide")
st.title("🌧️ Painel Geral")
st.caption("Acompanhamento climático da sua propriedade")

state = get_state()
render_banner(state)
live_updates()

# -----------------------------
# Indicators
# -----------------------------
stats = compute_dashboard_stats(state.records)

c1, c2, c3, c4, c5 = st.columns(5)
c1.metric("Média Diária", f"{stats.daily_average:.1f} mm")
c2.metric("Máxima Lançada", f"{stats.max_rainfall:.1f} mm")
c3.metric("Total Semanal", f"{stats.weekly_total:.1f} mm")
c4.metric("Total Mensal", f"{stats.monthly_total:.1f} mm")
c5.metric("Total Safra", f"{stats.season_total:.1f} mm")

# -----------------------------
# Last 30 days
# -----------------------------
series = last_30_days_series(state.records)
df = pd.DataFrame([p.model_dump() for p in series])

fig = px.bar(
    df,
    x="label",
    y="amount",
    title="Precipitação - Últimos 30 Dias",
    labels={"label": "", "amount": "Chuva (mm)"},
    hover_data={"day": True, "label": False},
)
fig.update_traces(marker_color="#10b981")
fig.update_yaxes(title_text="mm", rangemode="tozero")
fig.update_xaxes(type="category")
st.plotly_chart(fig, use_container_width=True)

if not state.records:
    st.info("Nenhum lançamento de chuva ainda.")

reload_button()
