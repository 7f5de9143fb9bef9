"""tf - Terraform wrapper over a versioned configuration library."""

__version__ = "1.5.0"
