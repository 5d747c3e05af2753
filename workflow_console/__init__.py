"""Workflow console: task-tree construction and view projections."""

__version__ = "0.1.0"
