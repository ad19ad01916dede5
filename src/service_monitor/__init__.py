"""Configuration-driven REST/SOAP service health monitor."""

__version__ = "0.1.0"
