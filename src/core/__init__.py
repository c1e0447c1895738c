"""Core application settings, logging and errors."""
