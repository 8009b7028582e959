"""Relumen admin service."""
