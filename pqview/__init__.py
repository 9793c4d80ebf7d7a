"""pqview: terminal dashboard for the Postfix mail queue."""

__version__ = "0.1.0"
