# app/main.py

import streamlit as st
from dotenv import load_dotenv
from ui.login import login_page, logout
from ui.market import products_page, transactions_page


load_dotenv()


def main_page():
    st.title(f"Hello, {st.session_state['username']}!")

    st.sidebar.markdown("## 📋 Menu")

    if st.sidebar.button("🛒 Products"):
        st.session_state["page"] = "products"
    if st.sidebar.button("💸 Transactions"):
        st.session_state["page"] = "transactions"
    if st.sidebar.button("🔓 Logout"):
        logout()
        st.session_state.clear()
        st.rerun()

    page = st.session_state.get("page", "products")
    if page == "transactions":
        transactions_page()
    else:
        products_page()


if "access_token" not in st.session_state:
    login_page()
    st.divider()
    products_page()
else:
    main_page()
