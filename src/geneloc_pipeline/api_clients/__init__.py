from geneloc_pipeline.api_clients.base import CachedAPIClient

__all__ = ["CachedAPIClient"]
