"""Core configuration, database session and security helpers."""
