"""
Entry point for running arp_ping_scanner as a module.

This allows the package to be executed with: python -m arp_ping_scanner
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
