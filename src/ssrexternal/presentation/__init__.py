"""Presentation layer: public facade."""
