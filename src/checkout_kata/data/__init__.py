"""Data subpackage - catalog loading and export."""
