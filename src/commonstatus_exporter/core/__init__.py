"""Status-line conversion engine."""
