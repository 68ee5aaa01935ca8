"""Helpers for building parameterized SQL."""
