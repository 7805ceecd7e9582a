"""Configuration, logging, errors, security and dependency wiring."""
