# streamlit/pages/03_Mapa.py
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from agrorain.services.kml import KML_MIME_TYPE, build_kml, kml_filename
from agrorain.services.stats import local_today
from agrorain.services.summaries import build_gauge_summaries, map_center
from session import get_state, live_updates, reload_button, render_banner

MAP_STYLE = "open-street-map"
ATTRIBUTION = "© OpenStreetMap contributors"

st.set_page_config(page_title="AgroRain – Mapa & KML", page_icon="🗺️", layout="wide")
st.title("🗺️ Mapa de Precipitação")
st.caption("Visualização geográfica dos totais acumulados.")

state = get_state()
render_banner(state)
live_updates()

summaries = build_gauge_summaries(state.gauges, state.records)
center_lat, center_lon = map_center(summaries)

# -----------------------------
# KML export
# -----------------------------
st.download_button(
    "⬇️ Exportar Arquivo KML",
    data=build_kml(summaries),
    file_name=kml_filename(local_today()),
    mime=KML_MIME_TYPE,
    disabled=not summaries,
)

# -----------------------------
# Map
# -----------------------------
if summaries:
    df = pd.DataFrame([s.model_dump() for s in summaries])
    df["description"] = df["description"].fillna("")
    df["last_date"] = df["last_date"].map(lambda d: d.strftime("%d/%m/%Y") if d else "-")
    # marker area follows the season total; empty gauges stay visible
    df["marker_size"] = df["total"].clip(lower=1.0)

    fig = px.scatter_map(
        df,
        lat="latitude",
        lon="longitude",
        size="marker_size",
        size_max=40,
        color="total",
        color_continuous_scale="Blues",
        hover_name="name",
        hover_data={
            "description": True,
            "total": ":.1f",
            "last_amount": True,
            "last_date": True,
            "latitude": False,
            "longitude": False,
            "marker_size": False,
        },
        labels={
            "description": "Descrição",
            "total": "Total Safra (mm)",
            "last_amount": "Última Chuva (mm)",
            "last_date": "Data",
        },
        center={"lat": center_lat, "lon": center_lon},
        zoom=12,
        map_style=MAP_STYLE,
    )
else:
    st.info("Nenhum pluviômetro com coordenadas válidas. Mostrando a localização padrão.")
    fig = go.Figure(go.Scattermap(lat=[], lon=[]))
    fig.update_layout(map={"style": MAP_STYLE, "center": {"lat": center_lat, "lon": center_lon}, "zoom": 4})

fig.update_layout(height=600, margin={"l": 0, "r": 0, "t": 0, "b": 0})
st.plotly_chart(fig, use_container_width=True)
st.caption(f"Marcador: local do pluviômetro, tamanho proporcional ao total acumulado. Mapa: {ATTRIBUTION}")

# -----------------------------
# Table
# -----------------------------
if summaries:
    st.dataframe(
        df[["name", "total", "last_amount", "last_date"]].rename(columns={
            "name": "Pluviômetro",
            "total": "Total Safra (mm)",
            "last_amount": "Última Chuva (mm)",
            "last_date": "Data",
        }),
        use_container_width=True,
        hide_index=True,
        column_config={"Total Safra (mm)": st.column_config.NumberColumn(format="%.1f")},
    )

skipped = len(state.gauges) - len(summaries)
if skipped:
    st.caption(f"{skipped} pluviômetro(s) sem coordenadas válidas não aparecem no mapa nem no KML.")

reload_button()
