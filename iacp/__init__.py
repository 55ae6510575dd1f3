"""IACP: identity, authentication, claim configuration and application/role administration."""

__version__ = "1.0.0"
