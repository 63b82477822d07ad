"""
ILP quote-response service.

Generates Interledger v1 fulfilments, conditions and payment packets for
Mojaloop quote responses, and validates fulfilments against conditions.
"""

__version__ = "0.1.0"
