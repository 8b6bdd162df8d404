"""Declarative base shared by the ORM models."""
