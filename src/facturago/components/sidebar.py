"""
Main Sidebar Component

Handles application navigation and logout.
"""

import streamlit as st


def reset_session_state() -> None:
    """Drop the per-user working state kept between reruns."""
    for key in ("working_copy", "generated_image", "language"):
        st.session_state.pop(key, None)


def sidebar() -> None:
    with st.sidebar:
        top_col1, top_col2, top_col3 = st.columns([5, 5, 2], gap="small")
        with top_col1:
            if st.button(
                "⚙️ Paramètres",
                key="settings_btn",
                use_container_width=True,
                type="primary" if st.session_state["page"] == "settings" else "secondary",
            ):
                st.session_state["page"] = "settings"
                st.rerun()
        with top_col2:
            if st.button(
                "🎨 Studio",
                key="images_btn",
                use_container_width=True,
                type="primary" if st.session_state["page"] == "images" else "secondary",
            ):
                st.session_state["page"] = "images"
                st.rerun()
        with top_col3:
            if st.button("➜", key="logout_btn", use_container_width=True):
                st.session_state["user"] = None
                st.session_state["session"] = None
                reset_session_state()
                del st.session_state["cookies"]["user_id"]
                st.session_state["cookies"].save()
                st.success("Déconnexion réussie.")
                st.rerun()
        st.markdown("---")

        st.selectbox(
            "Langue des documents",
            options=["fr", "en", "ar"],
            key="language",
        )
