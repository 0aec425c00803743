"""Adapters for storage, notifications and the web layer."""
