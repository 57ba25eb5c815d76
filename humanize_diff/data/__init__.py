"""Rule bundle storage."""
