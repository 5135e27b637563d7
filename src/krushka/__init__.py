"""KRUSHKA - Knight Rider: side-scrolling obstacle runner simulation."""

__version__ = "0.1.0"
