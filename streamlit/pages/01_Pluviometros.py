# streamlit/pages/01_Pluviometros.py
import pandas as pd
import streamlit as st

from agrorain.actions import add_gauge, delete_gauge
from agrorain.errors import FormError, StoreError
from agrorain.forms import gauge_from_form
from session import (
    flash,
    get_backend,
    get_state,
    live_updates,
    reload_button,
    render_banner,
    set_state,
    show_flash,
)

CONFIRM_KEY = "confirm_delete_gauge"

st.set_page_config(page_title="AgroRain – Pluviômetros", page_icon="📍", layout="wide")
st.title("📍 Gerenciar Pluviômetros")
st.caption("Cadastre os pontos de coleta de dados na sua propriedade.")

backend = get_backend()
state = get_state()
render_banner(state)
live_updates()
show_flash()

# -----------------------------
# New gauge
# -----------------------------
with st.form("gauge_form", clear_on_submit=True):
    st.subheader("Novo Pluviômetro")
    col_a, col_b = st.columns(2)
    name = col_a.text_input("Identificação/Nome", placeholder="Ex: Talhão 04 Sul")
    desc = col_b.text_input("Descrição (Opcional)", placeholder="Ex: Próximo ao bebedouro")
    lat = col_a.text_input("Latitude", placeholder="-23.12345")
    lng = col_b.text_input("Longitude", placeholder="-48.67890")
    submitted = st.form_submit_button("Cadastrar Pluviômetro", type="primary")

if submitted:
    try:
        gauge = gauge_from_form(name, lat, lng, desc)
    except FormError as e:
        st.warning(f"Preencha nome, latitude e longitude. {e}")
    else:
        try:
            set_state(add_gauge(backend, state, gauge))
        except StoreError as e:
            st.error(f"Erro ao salvar: {e}")
        else:
            flash(f"Pluviômetro **{gauge.name}** cadastrado.")
            st.rerun()

# -----------------------------
# Table
# -----------------------------
def _fmt_location(g) -> str:
    if not g.has_coordinates:
        return "-"
    return f"{g.latitude:.5f}, {g.longitude:.5f}"

if state.gauges:
    df = pd.DataFrame(
        [
            {"Nome": g.name, "Localização": _fmt_location(g), "Descrição": g.description or "-"}
            for g in state.gauges
        ]
    )
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.success(f"{len(df)} pluviômetros cadastrados.")
else:
    st.info("Nenhum pluviômetro cadastrado.")

# -----------------------------
# Delete (with confirmation)
# -----------------------------
if state.gauges:
    names = state.gauge_names()
    st.markdown("---")
    col_sel, col_btn = st.columns([4, 1])
    target = col_sel.selectbox("Excluir pluviômetro", options=list(names), format_func=lambda i: names[i])
    if col_btn.button("🗑️ Excluir", use_container_width=True):
        st.session_state[CONFIRM_KEY] = target

    pending = st.session_state.get(CONFIRM_KEY)
    if pending in names:
        st.warning(f"Tem certeza que deseja excluir o pluviômetro **{names[pending]}**?")
        col_yes, col_no, _ = st.columns([1, 1, 4])
        if col_yes.button("Sim, excluir", type="primary"):
            st.session_state.pop(CONFIRM_KEY, None)
            try:
                set_state(delete_gauge(backend, state, pending))
            except StoreError as e:
                st.error(f"Erro ao excluir: {e}")
            else:
                flash("Pluviômetro excluído.")
                st.rerun()
        if col_no.button("Cancelar"):
            st.session_state.pop(CONFIRM_KEY, None)
            st.rerun()

reload_button()
