"""gardensim: event-driven garden simulation."""

__version__ = "0.1.0"
