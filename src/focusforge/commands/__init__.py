"""CLI commands for FocusForge."""
