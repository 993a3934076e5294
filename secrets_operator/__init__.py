"""Client-cache identity and replica lifecycle coordination for the secrets operator."""

__version__ = "0.1.0"
