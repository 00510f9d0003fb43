"""Pydantic schemas for forms and finishers."""
