"""rustsmith test suite."""
