"""Centralized constants for the Leitner application.

Scheduling defaults and user-facing messages live here so every layer
imports from a single source of truth.
"""

# ---------- Buckets ----------
NEW_CARD_BUCKET = 0
NO_BUCKET = -1  # Recorded in history when a card had no bucket

# ---------- Hints ----------
NO_HINT_MESSAGE = "No hint available for this card."

# ---------- Server ----------
API_PREFIX = "/api"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
