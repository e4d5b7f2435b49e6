"""Services that coordinate FocusForge models."""
