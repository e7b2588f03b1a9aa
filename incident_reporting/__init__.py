"""Incident reporting API: validate, persist and notify."""
