"""Workflow console sidecar."""
