"""Rock-paper-scissors players, match setup, LAN discovery and pygame sprites."""

__version__ = "0.1.0"