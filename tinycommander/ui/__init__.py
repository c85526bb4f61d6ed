"""Modal UI components."""
