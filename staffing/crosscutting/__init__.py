"""Crosscutting concerns: configuration, logging, errors."""
