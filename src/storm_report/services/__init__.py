"""
Shared service utilities.

- http.py - pre-configured requests session used by every datasource
"""
