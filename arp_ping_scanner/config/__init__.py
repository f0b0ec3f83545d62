"""
Configuration module for the ARP Ping Scanner.
Provides YAML configuration loading and validation.
"""

from .config_loader import ConfigLoader, ScanConfig

__all__ = ['ConfigLoader', 'ScanConfig']
