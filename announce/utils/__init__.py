"""Configuration, errors, logging and URI helpers."""
