"""
Generic utility functions shared across modules.

Includes the clock abstraction used for "now" and logging setup for entry points.
"""
