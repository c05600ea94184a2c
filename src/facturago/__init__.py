"""
Facturago Package

Document settings engine for a small-business billing application:
- Document numbering (prefix, year format, padding, separator) per document kind
- Merge of stored company settings with built-in defaults
- Ordering, visibility and captions of the PDF document table columns
- HT/TTC price conversion, currency formatting and amounts in words
- PDF rendering of billing documents and an AI image studio

Main Components:
- domain/: pydantic models and constants
- services/: numbering, configuration merge, columns, pricing, persistence
- adapters/: Supabase, Gemini image API and PyMuPDF helpers
- app.py: Streamlit front end (settings customizer, image studio)

Usage:
    Run the application with: streamlit run src/facturago/app.py
"""

__version__ = "0.1.0"
__author__ = "Facturago Team"
