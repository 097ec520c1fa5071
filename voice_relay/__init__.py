"""Voice Relay: speech synthesis relay and account service."""

__version__ = "1.0.0"
