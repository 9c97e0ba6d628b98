"""Adapters implementing the store and cache ports."""
