"""Core types shared across reporthub."""
