"""Platform-level routes: health checks and the super admin console."""
