"""Plan output formatting."""
