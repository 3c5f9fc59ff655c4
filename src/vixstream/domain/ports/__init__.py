from .stream_provider import StreamProviderPort

__all__ = ["StreamProviderPort"]
