"""One-class-per-file model implementations; import from ``gemini_client.base.models``."""
