"""
Subpackage for supervised tweet classification.

The `text_classifier` module implements the workflow for splitting
the tf-idf matrix into training and test partitions, cross-validating
and training a classifier, and reporting precision, recall and F1.
"""

__all__ = ["text_classifier"]
