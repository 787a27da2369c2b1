"""Input processing helpers.

This package centralizes input validation so every host (console, tests, an
embedding runtime) flows through the same pipeline and shows up consistently in logs.
"""
