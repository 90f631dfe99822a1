"""Translation catalog modules used by the test suite."""
