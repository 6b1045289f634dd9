"""Advocate directory API."""
