"""
Image Studio Page

Generates images from a prompt, or edits an uploaded image following an
instruction, through Gemini.
"""

import base64

import streamlit as st

from facturago.domain.constants import IMAGE_SIZES
from facturago.errors import ImageGenerationError

GENERATION_FAILED = "Échec de la génération de l'image. Veuillez réessayer."
EDIT_FAILED = "Échec de la modification de l'image. Veuillez réessayer."


def _show_result() -> None:
    image = st.session_state.get("generated_image")
    if not image:
        return
    st.image(image, use_container_width=True)
    header, encoded = image.split(",", 1)
    st.download_button(
        "⬇️ Télécharger",
        data=base64.b64decode(encoded),
        file_name="image.png",
        mime=header[len("data:"):].split(";")[0],
    )


def run() -> None:
    st.title("🎨 Studio d'images")
    studio = st.session_state.get("image_studio")
    if studio is None:
        st.warning("Clé API Gemini manquante.")
        return

    generate_tab, edit_tab = st.tabs(["Générer", "Modifier"])

    with generate_tab:
        prompt = st.text_area("Description", key="generate_prompt")
        size = st.radio("Résolution", IMAGE_SIZES, horizontal=True, key="generate_size")
        if st.button("Générer", type="primary", disabled=not prompt.strip()):
            with st.spinner("Génération en cours..."):
                try:
                    st.session_state["generated_image"] = studio.generate_image(prompt, size)
                except ImageGenerationError:
                    st.error(GENERATION_FAILED)

    with edit_tab:
        uploaded = st.file_uploader("Image", type=["png", "jpg", "jpeg", "webp"], key="edit_upload")
        instruction = st.text_area("Instruction", key="edit_prompt")
        if st.button("Modifier", type="primary", disabled=uploaded is None or not instruction.strip()):
            encoded = base64.b64encode(uploaded.getvalue()).decode("ascii")
            with st.spinner("Modification en cours..."):
                try:
                    st.session_state["generated_image"] = studio.edit_image(
                        instruction, encoded, uploaded.type
                    )
                except (ImageGenerationError, ValueError):
                    st.error(EDIT_FAILED)

    _show_result()
