"""Tiny Commander: a dual-panel terminal file browser."""

__version__ = '1.0.0'
