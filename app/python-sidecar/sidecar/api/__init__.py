"""HTTP API for the workflow console sidecar."""
