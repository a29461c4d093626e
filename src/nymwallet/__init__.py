"""nymwallet — typed client for the Nym wallet backend."""

__version__ = "0.1.0"
