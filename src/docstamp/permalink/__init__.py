"""Permalink codec."""

from docstamp.permalink.codec import decode, encode, generate_permalink, new_entropy

__all__ = ["decode", "encode", "generate_permalink", "new_entropy"]
