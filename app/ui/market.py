# app/ui/market.py

import streamlit as st
from services.api import (
    create_product,
    create_transaction,
    delete_product,
    list_products,
    list_transactions,
    update_transaction_status,
)


STATUSES = ["pending", "completed", "cancelled"]


# -------------------------------
# Products
# -------------------------------

def products_page():
    st.header("🛒 Products")
    token = st.session_state.get("access_token")

    if token:
        with st.expander("➕ Add product"):
            with st.form("add_product_form", clear_on_submit=True):
                name = st.text_input("Name")
                price = st.number_input("Price", min_value=0.0, step=1.0)
                description = st.text_area("Description")
                submitted = st.form_submit_button("Save")
            if submitted:
                result = create_product(token, name, price, description)
                if result.get("error"):
                    st.error(f"❌ Unable to save: {result['error']}")
                else:
                    st.success("✅ Product saved")

    products = list_products()
    if not products:
        st.info("No products yet.")
        return

    for product in products:
        owner = (product.get("user") or {}).get("username", "?")
        st.markdown(f"**{product['name']}** - ${product['price']} · {owner}")
        if product.get("description"):
            st.caption(product["description"])
        if token and owner == st.session_state.get("username"):
            if st.button("🗑️ Delete", key=f"delete_product_{product['id']}"):
                result = delete_product(token, product["id"])
                if result.get("error"):
                    st.error(f"❌ Unable to delete: {result['error']}")
                else:
                    st.rerun()


# -------------------------------
# Transactions
# -------------------------------

def transactions_page():
    st.header("💸 Transactions")
    token = st.session_state["access_token"]

    with st.expander("➕ New transaction"):
        with st.form("add_transaction_form", clear_on_submit=True):
            to_user_id = st.number_input("To user ID", min_value=1, step=1)
            amount = st.number_input("Amount", min_value=0.0, step=1.0)
            submitted = st.form_submit_button("Save")
        if submitted:
            result = create_transaction(token, int(to_user_id), amount)
            if result.get("error"):
                st.error(f"❌ Unable to save: {result['error']}")
            else:
                st.success("✅ Transaction created")

    for tx in list_transactions(token):
        cols = st.columns([3, 2])
        cols[0].write(f"#{tx['id']} · {tx['amount']} · {tx['status']}")
        status = cols[1].selectbox(
            "Status",
            STATUSES,
            index=STATUSES.index(tx["status"]) if tx["status"] in STATUSES else 0,
            key=f"status_{tx['id']}",
            label_visibility="collapsed",
        )
        if status != tx["status"]:
            result = update_transaction_status(token, tx["id"], status)
            if result.get("error"):
                st.error(f"❌ Unable to update: {result['error']}")
            else:
                st.rerun()
