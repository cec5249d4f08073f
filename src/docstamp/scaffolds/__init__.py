"""Packaged markdown scaffolds."""
