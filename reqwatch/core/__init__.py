"""Core building blocks: configuration, logging, errors and protocols."""
