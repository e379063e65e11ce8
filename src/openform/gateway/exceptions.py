from __future__ import annotations


class GatewayError(Exception):
    pass


class GatewayConnectionError(GatewayError):
    pass


class FormNotFoundError(GatewayError):
    pass


class UploadError(GatewayError):
    pass


class StorageNotConfiguredError(UploadError):
    """File storage is unavailable; callers may fall back to inline encoding."""
