"""
bundleresolver - App store identifier resolution

Resolves numeric iOS App IDs and Android package names to store
metadata (name, publisher, canonical URL) and writes aligned rows.
"""

__version__ = "0.1.0"
