"""Shared building blocks: errors, logging, models, HTTP pooling and streaming."""
