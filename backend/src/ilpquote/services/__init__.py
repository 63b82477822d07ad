"""
Services package - ILP orchestration.

Composes the domain calculations into quote-response artifacts.
"""

from .ilp import IlpService

__all__ = ["IlpService"]
