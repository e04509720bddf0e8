"""
Subpackage for presenting results.

Figures for the held-out confusion matrix and the per-topic top terms.
"""

__all__ = ["visualizations"]
