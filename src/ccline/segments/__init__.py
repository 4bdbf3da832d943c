"""Status line segments."""
