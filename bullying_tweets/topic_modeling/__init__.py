"""
Subpackage for unsupervised topic modeling.

The `lda` module fits a Latent Dirichlet Allocation model to the
English tweets and reports the top terms of every topic.
"""

__all__ = ["lda"]
