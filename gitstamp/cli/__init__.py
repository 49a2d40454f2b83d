"""Command-line interface for gitstamp."""
