"""
Date/time formatting and timestamp conversion for logging and reporting.

Includes the access-log, log-line and calendar-date formatters, the per-day
timezone offset cache, epoch timestamp conversions, and a dispatcher that
formats epoch milliseconds by named format.
"""
