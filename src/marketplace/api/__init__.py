"""Marketplace HTTP API package.

Router modules are imported directly (``marketplace.api.orders`` and so on);
the domain traversal loads them individually during ``marketplace.init()``.
"""
