#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Helper utilities shared by translators and the CLI."""
