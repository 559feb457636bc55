"""Finale: jury composition, jury vote and season archives."""
