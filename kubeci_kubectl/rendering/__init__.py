"""Template rendering for command strings and manifest files."""
