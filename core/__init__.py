"""Exceptions, signal names and the page registry shared by every layer."""
