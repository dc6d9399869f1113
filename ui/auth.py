"""
Authentication UI for RECOOK BOOK.

Provides the login and signup pages and the sidebar account panel.
Forms hand their fields to the site controller; all checks and state
changes happen there.
"""

import streamlit as st

from services import SiteController
from services.auth_service import LOGIN_PAGE, SIGNUP_PAGE
from services.validation_service import password_strength, get_password_strength_feedback
from .navigation import navigate
from .renderer import StreamlitRenderer


class AuthenticationInterface:
    """
    Login, signup, and logout interface.
    """

    STRENGTH_BADGES = {
        "Weak": "🔴 Weak",
        "Medium": "🟠 Medium",
        "Strong": "🟢 Strong"
    }

    def __init__(self, controller: SiteController, renderer: StreamlitRenderer):
        self.controller = controller
        self.renderer = renderer

    def render_auth_sidebar(self):
        """Account panel reflecting the rendered auth state"""
        session = self.renderer.session

        st.sidebar.markdown("### 👤 Account")
        if session.is_authenticated:
            st.sidebar.write(f"Welcome, **{session.account.first_name}**!")
            st.sidebar.caption(f"📧 {session.account.email}")
            if st.sidebar.button("🚪 Logout"):
                navigate(self.controller.request_logout())
        else:
            col1, col2 = st.sidebar.columns([1, 1])
            with col1:
                if st.button("🔑 Login", key="sidebar_login"):
                    navigate(LOGIN_PAGE)
            with col2:
                if st.button("📝 Sign Up", key="sidebar_signup"):
                    navigate(SIGNUP_PAGE)

    def render_login_page(self):
        st.title("🔑 Welcome back to RECOOK BOOK")
        st.markdown("*Sign in to share and discover leftover recipes*")

        with st.form("login_form"):
            email = st.text_input("📧 Email Address", placeholder="Enter your email address")
            password = st.text_input("🔒 Password", type="password", placeholder="Enter your password")
            login_clicked = st.form_submit_button("🔑 Sign In", type="primary")

        if login_clicked:
            with st.spinner("Signing in..."):
                destination = self.controller.submit_login(email, password)
            self.renderer.show_field_errors()
            if destination:
                navigate(destination)

        st.markdown("Don't have an account yet?")
        if st.button("📝 Create an account"):
            navigate(SIGNUP_PAGE)

    def render_signup_page(self):
        st.title("📝 Join RECOOK BOOK")
        st.markdown("*Turn your leftovers into something delicious*")

        with st.form("signup_form"):
            col1, col2 = st.columns([1, 1])

            with col1:
                first_name = st.text_input("First Name")
                email = st.text_input("📧 Email Address", placeholder="your.email@example.com")
                password = st.text_input("🔒 Password", type="password")

            with col2:
                last_name = st.text_input("Last Name")
                st.write("")
                confirm_password = st.text_input("🔒 Confirm Password", type="password")

            terms_agreed = st.checkbox("I agree to the Terms of Service and Privacy Policy")
            newsletter = st.checkbox("Send me leftover recipe ideas and updates")

            signup_clicked = st.form_submit_button("📝 Create Account", type="primary")

        if signup_clicked:
            strength = password_strength(password)
            if strength:
                st.caption(f"Password strength: {self.STRENGTH_BADGES[strength]}")
                min_length = self.controller.config.password_min_length
                for hint in get_password_strength_feedback(password, min_length):
                    st.caption(f"• {hint}")

            with st.spinner("Creating your account..."):
                account = self.controller.submit_signup({
                    'first_name': first_name,
                    'last_name': last_name,
                    'email': email,
                    'password': password,
                    'confirm_password': confirm_password,
                    'terms_agreed': terms_agreed,
                    'newsletter': newsletter
                })
            self.renderer.show_field_errors()
            if account:
                st.balloons()

        st.markdown("Already have an account?")
        if st.button("🔑 Sign in instead"):
            navigate(LOGIN_PAGE)
