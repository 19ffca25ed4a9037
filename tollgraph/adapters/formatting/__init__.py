"""Formatting adapters - Implementations of CostFormatterPort."""

from .cost_formatter import CostFormatSpec, CostFormatter, render_number

__all__ = ["CostFormatSpec", "CostFormatter", "render_number"]
