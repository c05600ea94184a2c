"""
Settings Customizer Page

Edits the company identity, legal identifiers, branding and the document
rules (numbering, columns, labels, price display) on a working copy that is
only written to Supabase when the user presses save.
"""

import base64
from datetime import date

import pandas as pd
import streamlit as st

from facturago.domain.constants import CURRENCIES, DEFAULT_PRIMARY_COLOR, DOCUMENT_TITLES
from facturago.adapters.pdf_renderer import render_document_pdf
from facturago.domain.models import BillingDocument, DocumentKind, LineItem, PriceDisplayMode, Recipient
from facturago.errors import DocumentRenderError, FormValidationError
from facturago.services.settings_store import SupabaseSettingsStore
from facturago.services.working_copy import SettingsWorkingCopy

YEAR_FORMATS = ["YYYY", "YY", "NONE"]

LABEL_CAPTIONS = {
    "total_ht": "Total HT",
    "total_tax": "Total TVA",
    "total_net": "Net à payer",
    "amount_in_words_prefix": "Montant en lettres",
    "signature_sender": "Signature expéditeur",
    "signature_recipient": "Signature destinataire",
}


def _store() -> SupabaseSettingsStore:
    return SupabaseSettingsStore(st.session_state["supabase"], st.session_state["user"])


def _working_copy() -> SettingsWorkingCopy:
    if "working_copy" not in st.session_state:
        st.session_state["working_copy"] = SettingsWorkingCopy.from_stored(_store().load())
    return st.session_state["working_copy"]


def _text_field(copy: SettingsWorkingCopy, label: str, name: str, **kwargs) -> None:
    value = st.text_input(label, value=getattr(copy.settings, name) or "", key=f"field_{name}", **kwargs)
    if value != (getattr(copy.settings, name) or ""):
        copy.update_field(name, value)


def render_general_tab(copy: SettingsWorkingCopy) -> None:
    _text_field(copy, "Raison sociale", "company_name")
    _text_field(copy, "Adresse", "address")
    col1, col2, col3 = st.columns(3)
    with col1:
        _text_field(copy, "Téléphone", "phone")
    with col2:
        _text_field(copy, "Email", "email")
    with col3:
        _text_field(copy, "Site web", "website")


def render_legal_tab(copy: SettingsWorkingCopy) -> None:
    col1, col2 = st.columns(2)
    with col1:
        _text_field(copy, "RC", "rc")
        _text_field(copy, "ICE", "ice")
        _text_field(copy, "IF", "fiscal_id")
    with col2:
        _text_field(copy, "Patente", "patente")
        _text_field(copy, "CNSS", "cnss")
        _text_field(copy, "Capital", "capital")


def render_branding_tab(copy: SettingsWorkingCopy) -> None:
    """Logo upload and primary color."""
    logo_col, color_col = st.columns([2, 1])
    with logo_col:
        if copy.settings.logo:
            st.image(copy.settings.logo, width=160)
            if st.button("🗑️ Supprimer le logo", key="remove_logo"):
                copy.clear_logo()
                st.rerun()

        uploaded = st.file_uploader("Logo", type=["png", "jpg", "jpeg", "webp"], key="logo_upload")
        if uploaded is not None:
            encoded = base64.b64encode(uploaded.getvalue()).decode("ascii")
            try:
                copy.set_logo(f"data:{uploaded.type};base64,{encoded}")
            except FormValidationError as e:
                st.error(str(e))

    with color_col:
        current_color = copy.settings.primary_color or DEFAULT_PRIMARY_COLOR
        color = st.color_picker("Couleur principale", value=current_color)
        if color != current_color:
            copy.update_field("primary_color", color)


def render_numbering(copy: SettingsWorkingCopy) -> None:
    st.subheader("Numérotation")
    for kind in DocumentKind:
        config = copy.numbering(kind)
        with st.expander(DOCUMENT_TITLES[kind.value]):
            col1, col2, col3, col4, col5 = st.columns(5)
            with col1:
                prefix = st.text_input("Préfixe", value=config.prefix, key=f"{kind.value}_prefix")
            with col2:
                year_format = st.selectbox(
                    "Année",
                    YEAR_FORMATS,
                    index=YEAR_FORMATS.index(config.year_format),
                    key=f"{kind.value}_year",
                )
            with col3:
                separator = st.text_input(
                    "Séparateur", value=config.separator, key=f"{kind.value}_sep"
                )
            with col4:
                start_number = st.number_input(
                    "Premier numéro", min_value=1, value=config.start_number, key=f"{kind.value}_start"
                )
            with col5:
                padding = st.number_input(
                    "Chiffres", min_value=1, max_value=10, value=config.padding, key=f"{kind.value}_pad"
                )
            copy.update_numbering(
                kind,
                prefix=prefix,
                year_format=year_format,
                separator=separator,
                start_number=int(start_number),
                padding=int(padding),
            )

    previews = copy.previews()
    st.dataframe(
        pd.DataFrame(
            [{"Document": DOCUMENT_TITLES[kind.value], "Aperçu": value} for kind, value in previews.items()]
        ),
        hide_index=True,
        use_container_width=True,
    )


def render_columns(copy: SettingsWorkingCopy) -> None:
    st.subheader("Colonnes du tableau")
    for index, column in enumerate(copy.columns):
        up_col, down_col, visible_col, label_col = st.columns([1, 1, 2, 6])
        with up_col:
            if st.button("⬆️", key=f"col_up_{column.id}", disabled=index == 0):
                copy.move_column(index, "up")
                st.rerun()
        with down_col:
            if st.button("⬇️", key=f"col_down_{column.id}", disabled=index == len(copy.columns) - 1):
                copy.move_column(index, "down")
                st.rerun()
        with visible_col:
            visible = st.checkbox("Visible", value=column.visible, key=f"col_visible_{column.id}")
            if visible != column.visible:
                copy.toggle_column(column.id)
        with label_col:
            label = st.text_input(
                column.id, value=column.label, key=f"col_label_{column.id}", label_visibility="collapsed"
            )
            if label != column.label:
                copy.relabel_column(column.id, label)


def render_labels(copy: SettingsWorkingCopy) -> None:
    st.subheader("Libellés")
    labels = copy.settings.document_labels
    col1, col2 = st.columns(2)
    for position, (key, caption) in enumerate(LABEL_CAPTIONS.items()):
        with col1 if position % 2 == 0 else col2:
            text = st.text_input(caption, value=getattr(labels, key), key=f"label_{key}")
            if text != getattr(labels, key):
                copy.update_label(key, text)


def render_documents_tab(copy: SettingsWorkingCopy) -> None:
    render_numbering(copy)
    st.markdown("---")
    render_columns(copy)
    st.markdown("---")
    render_labels(copy)
    st.markdown("---")

    st.subheader("Options")
    modes = [mode.value for mode in PriceDisplayMode]
    mode = st.radio(
        "Saisie des prix",
        modes,
        index=modes.index(copy.settings.price_display_mode.value),
        horizontal=True,
    )
    copy.set_price_display_mode(mode)

    codes = [currency["code"] for currency in CURRENCIES]
    current = copy.settings.default_currency_code or codes[0]
    currency = st.selectbox("Devise", codes, index=codes.index(current) if current in codes else 0)
    if currency != copy.settings.default_currency_code:
        copy.update_field("default_currency_code", currency)

    show_words = st.toggle(
        "Afficher le montant en lettres", value=copy.settings.show_amount_in_words is not False
    )
    if show_words != (copy.settings.show_amount_in_words is not False):
        copy.update_field("show_amount_in_words", show_words)

    show_signature = st.toggle(
        "Signature du client", value=bool(copy.settings.show_signature_recipient)
    )
    if show_signature != bool(copy.settings.show_signature_recipient):
        copy.update_field("show_signature_recipient", show_signature)

    footer = st.text_area("Pied de page", value=copy.settings.footer_notes or "")
    if footer != (copy.settings.footer_notes or ""):
        copy.update_field("footer_notes", footer)
    terms = st.text_area("Conditions de paiement", value=copy.settings.default_payment_terms or "")
    if terms != (copy.settings.default_payment_terms or ""):
        copy.update_field("default_payment_terms", terms)


def render_preview(copy: SettingsWorkingCopy) -> None:
    """Sample invoice rendered with the unsaved settings."""
    sample = BillingDocument(
        kind=DocumentKind.INVOICE,
        document_id=copy.preview(DocumentKind.INVOICE),
        issue_date=date.today(),
        recipient=Recipient(name="Client exemple", address="Casablanca"),
        line_items=[
            LineItem(name="Prestation de conseil", reference="P001", quantity=2, unit_price=1500),
            LineItem(name="Formation", reference="P002", quantity=1, unit_price=800, vat=10),
        ],
    )
    if st.button("👁️ Aperçu PDF", key="preview_pdf"):
        try:
            pdf_bytes = render_document_pdf(sample, copy.snapshot(), language=st.session_state.get("language", "fr"))
        except DocumentRenderError as e:
            st.error(str(e))
            return
        st.download_button("⬇️ Télécharger l'aperçu", data=pdf_bytes, file_name="apercu.pdf", mime="application/pdf")


def run() -> None:
    """Render the settings customizer."""
    st.title("⚙️ Paramètres")
    copy = _working_copy()

    general, legal, branding, documents = st.tabs(["Général", "Légal", "Identité visuelle", "Documents"])
    with general:
        render_general_tab(copy)
    with legal:
        render_legal_tab(copy)
    with branding:
        render_branding_tab(copy)
    with documents:
        render_documents_tab(copy)
        st.markdown("---")
        render_preview(copy)

    if st.button("💾 Enregistrer", type="primary", disabled=copy.is_saving):
        with st.spinner("Enregistrement..."):
            outcome = copy.save(_store())
        if outcome.success:
            st.toast(outcome.message, icon="✅")
        else:
            st.error(outcome.message)
