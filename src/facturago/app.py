"""
Facturago - Main Application

A Streamlit application to configure how billing documents are numbered,
laid out and rendered, with a small Gemini-backed image studio.
"""

import streamlit as st
from streamlit_cookies_manager import EncryptedCookieManager

from facturago.adapters.image_client import ImageStudioAdapter
from facturago.adapters.supabase_client import get_supabase_client
from facturago.components.sidebar import sidebar
from facturago.errors import ImageGenerationError
from facturago.logging_config import setup_logging
from facturago.page.image_studio import run as image_studio
from facturago.page.settings import run as settings_page

PAGE_ICON = "🧾"


def initialize_session():
    """Initialize Supabase client, cookies, and session state."""
    setup_logging(st.secrets.get("log_level", "INFO"))

    supabase = get_supabase_client(st.secrets["supabase_url"], st.secrets["supabase_key"])
    st.session_state["supabase"] = supabase

    cookies = EncryptedCookieManager(
        prefix="facturago",
        password=st.secrets["cookie_secret"],
    )
    st.session_state["cookies"] = cookies
    if not cookies.ready():
        st.stop()

    if "user" not in st.session_state:
        st.session_state["user"] = cookies.get("user_id")
    if "session" not in st.session_state:
        st.session_state["session"] = None


def render_login_page():
    """Render the login page UI."""
    st.markdown(
        """
        <div style="
            display: flex;
            justify-content: center;
            align-items: center;
            height: 30vh;
            flex-direction: column;
        ">
            <h1>Facturago</h1>
        </div>
        """,
        unsafe_allow_html=True,
    )
    return st.text_input("Email"), st.text_input("Mot de passe", type="password")


def handle_authentication(email, password):
    if st.button("Connexion"):
        try:
            session = st.session_state["supabase"].auth.sign_in_with_password(
                {"email": email, "password": password}
            )
            user = session.user
            st.session_state["user"] = user.id
            st.session_state["session"] = session

            st.session_state["cookies"]["user_id"] = user.id
            st.session_state["cookies"].save()

            st.success("Connexion réussie!")
            st.rerun()
        except Exception as e:
            st.error(f"Connexion impossible: {str(e)}")


def initialize_session_variables():
    if "page" not in st.session_state:
        st.session_state["page"] = "settings"
    if "image_studio" not in st.session_state:
        try:
            st.session_state["image_studio"] = ImageStudioAdapter(
                api_key=st.secrets.get("gemini_api_key")
            )
        except ImageGenerationError:
            st.session_state["image_studio"] = None


def render_main_app():
    sidebar()

    if st.session_state["page"] == "images":
        image_studio()
    else:
        settings_page()


def main():
    """Main application entry point."""
    st.set_page_config(page_icon=PAGE_ICON, page_title="Facturago", layout="wide")
    initialize_session()

    if st.session_state["user"] is None:
        email, password = render_login_page()
        handle_authentication(email, password)
        st.stop()

    initialize_session_variables()
    render_main_app()


if __name__ == "__main__":
    main()
