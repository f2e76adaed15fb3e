"""Core domain types shared across the plugin."""
