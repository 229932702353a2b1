"""HTTP API for dictation-router."""
