"""Core components: configuration, settings, sessions and exceptions."""
