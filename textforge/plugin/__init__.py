"""Plugin manifests, sandboxing, registry, loading and lifecycle management."""

__all__ = ["errors", "registry", "manifest", "sandbox", "manager", "loader"]