"""Markdown document generation."""
