"""One-time pad encryption over TCP: key generator, servers and clients for a 27-character alphabet."""

__version__ = "0.1.0"