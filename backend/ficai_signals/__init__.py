"""Fic.AI Signals: crowd-sourced tag voting for online stories, keyed by URL."""
