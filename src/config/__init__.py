"""
Configuration loading and validation.

Provides strongly typed settings objects for the timezone offset cache and
logging, loaded from environment variables with upfront validation.
"""
