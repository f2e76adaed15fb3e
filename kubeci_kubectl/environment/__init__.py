"""Environment processing for template context and credentials."""
