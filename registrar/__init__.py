"""Registrar — in-memory registry of user nodes behind a small HTTP API."""

__version__ = "0.1.0"
