"""
Persistence adapters.

Today every collection is a JSON file; services depend on JsonFileStore and
never open the files themselves.
"""
