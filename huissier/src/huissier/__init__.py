"""
Huissier - Discord wallet verification service.

Proves Solana wallet ownership, measures token holdings across every
wallet linked to a Discord account and grants tiered roles.
"""

__version__ = "0.1.0"
