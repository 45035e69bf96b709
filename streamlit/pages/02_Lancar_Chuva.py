# streamlit/pages/02_Lancar_Chuva.py
import streamlit as st

from agrorain.actions import add_record
from agrorain.errors import FormError, StoreError
from agrorain.forms import record_from_form
from agrorain.services.stats import local_today
from session import flash, get_backend, get_state, live_updates, render_banner, set_state, show_flash

st.set_page_config(page_title="AgroRain – Lançar Chuva", page_icon="💧", layout="centered")
st.title("💧 Lançar Chuva")
st.caption("Registre o volume medido em um pluviômetro.")

backend = get_backend()
state = get_state()
render_banner(state)
live_updates()
show_flash()

# all gauges, also the ones without usable coordinates
names = state.gauge_names()

if not names:
    st.info("Cadastre um pluviômetro antes de lançar chuva.")
else:
    with st.form("record_form", clear_on_submit=True):
        gauge_id = st.selectbox(
            "Selecionar Pluviômetro",
            options=list(names),
            index=None,
            format_func=lambda i: names[i],
            placeholder="Escolha um local...",
        )
        day = st.date_input("Data da Coleta", value=local_today(), format="DD/MM/YYYY")
        amount = st.number_input("Quantidade (mm)", value=None, step=0.1, format="%.1f", placeholder="0.0")
        submitted = st.form_submit_button("💾 Salvar Lançamento", type="primary", use_container_width=True)

    if submitted:
        try:
            record = record_from_form(gauge_id, amount, day)
        except FormError as e:
            st.warning(f"Escolha o pluviômetro, a data e a quantidade. {e}")
        else:
            try:
                set_state(add_record(backend, state, record))
            except StoreError as e:
                st.error(f"Erro ao salvar: {e}")
            else:
                flash(f"Lançado com Sucesso! {record.amount:.1f} mm em {names[record.gauge_id]}.")
                st.rerun()

st.info("Dica: Um milímetro de chuva corresponde a um litro de água por metro quadrado (1 L/m²).", icon="💧")
