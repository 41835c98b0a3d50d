"""Shared utilities for Vitrine."""
