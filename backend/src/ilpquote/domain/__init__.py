"""
Domain package - Core ILP logic with no external dependencies.

This package contains pure Python models, encoders and hashing rules
that implement the Interledger crypto-condition calculations.
"""
