"""kubectl process execution."""
