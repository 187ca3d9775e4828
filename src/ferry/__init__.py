"""Copy Docker images to a remote host through an ephemeral registry and an ssh tunnel."""
