"""Key-value store layer.

This package provides the preferences store contract and its in-memory
and plist file implementations, plus the process-wide default store.
"""
