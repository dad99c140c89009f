"""Session, scoring and proctoring services."""
