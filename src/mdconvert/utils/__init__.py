#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared helpers: source decoding, HTML escaping and slug generation."""
