"""
CLI runner module.

Provides commands:
- init-config: Write a default config file
- register / publish / delete: Document lifecycle
- query / read / images: Inspect a document
- list: Page through documents
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
