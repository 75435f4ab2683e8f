"""Schemas — Pydantic models for data crossing the registration boundary."""
