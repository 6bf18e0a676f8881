"""Dossier API: clearance-gated document access."""
