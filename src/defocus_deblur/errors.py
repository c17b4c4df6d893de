"""
errors.py - exception types raised by the deblur core

Every failure in the numeric core is raised immediately at the call that
detects it; nothing is retried or translated on the way up.

  • InvalidParameter   bad radius / snr / image rank / empty shape
  • DimensionMismatch  transfer function and image disagree in shape
  • NumericAnomaly     NaN or Inf showed up in a spectrum

The concrete types also derive from the matching builtin (ValueError,
ArithmeticError) so callers that already catch those keep working.

© 2025 Ali Pouya, Imaging Pipeline (defocus deblur edition)
"""

from __future__ import annotations


class DeblurError(Exception):
    """Base class for everything raised by defocus_deblur."""


class InvalidParameter(DeblurError, ValueError):
    """A caller-supplied parameter is outside its valid domain."""


class DimensionMismatch(DeblurError, ValueError):
    """Two grids that must be co-indexed have different shapes."""


class NumericAnomaly(DeblurError, ArithmeticError):
    """Non-finite values appeared in an intermediate result."""
