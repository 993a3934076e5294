"""Infrastructure: Kubernetes replica store, lifecycle probe, client cache."""
