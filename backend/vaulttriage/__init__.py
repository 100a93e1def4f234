"""Vault Triage - scan and triage a local vault of markdown notes"""

__version__ = "0.1.0"
