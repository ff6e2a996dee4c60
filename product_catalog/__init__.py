"""Product catalog gRPC service.

Product and subscription plan management exposed over gRPC, persisted with
SQLModel and guarded by Basic authentication.
"""

__version__ = "1.0.0"
