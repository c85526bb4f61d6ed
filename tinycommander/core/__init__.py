"""Core runtime modules for Tiny Commander."""
