"""ssrexternal infrastructure layer.

Filesystem adapters for the domain ports, host built-ins and name filters.
"""
