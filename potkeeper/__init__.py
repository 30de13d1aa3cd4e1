"""
potkeeper: a ledger for card games played against a rotating bank.
"""

__version__ = "0.1.0"
