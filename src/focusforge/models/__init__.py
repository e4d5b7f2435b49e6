"""Domain models for FocusForge."""
