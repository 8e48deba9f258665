"""Core data model, enums, constants and exceptions."""
