"""Authentication and session core for the IPDR analysis dashboard."""

__version__ = "0.1.0"
