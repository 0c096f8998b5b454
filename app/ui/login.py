# app/ui/login.py

import streamlit as st
from services.api import login_user, register_user


def logout():
    st.session_state.pop("access_token", None)
    st.session_state.pop("username", None)


def login_page():
    st.title("🔐 Login")

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form()


def show_login_form():
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        otp = st.text_input("One-time code", max_chars=6)
        submitted = st.form_submit_button("Login")

    if submitted:
        with st.spinner("Logging in..."):
            result = login_user(username, password, otp)
            if result.get("error"):
                st.error(f"❌ Login failed: {result['error']}")
            else:
                st.session_state["access_token"] = result["token"]
                st.session_state["username"] = username
                st.success("✅ Logged in")
                st.rerun()

    if st.button("Register"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.subheader("📝 Register")

    new_user = st.text_input("New username", key="new_user")
    new_pass = st.text_input("New password", type="password", key="new_pass")

    if st.button("Create account"):
        with st.spinner("Registering..."):
            result = register_user(new_user, new_pass)
            if result.get("error"):
                st.error(f"❌ Registration failed: {result['error']}")
            else:
                st.success("🎉 Registered! Add this secret to your authenticator app now.")
                st.warning("The secret is shown only once.")
                st.code(result["otpSecret"])

    if st.button("← Back to login"):
        st.session_state["show_register"] = False
        st.rerun()
