"""Core package: configuration, errors, data models and the cloud adapter."""
