"""Core building blocks: configuration, logging and error classification."""
