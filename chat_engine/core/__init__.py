"""Core domain logic: retrieval, prompt rendering, error types."""
