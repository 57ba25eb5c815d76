"""Text analysis, coverage, interjections and diffing."""
