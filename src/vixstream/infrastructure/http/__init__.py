from .fetcher import FetchResult, HttpFetcher, create_http_client
from .proxy_transport import ForwardingProxyTransport, build_transport, proxied_url

__all__ = [
    "FetchResult",
    "ForwardingProxyTransport",
    "HttpFetcher",
    "build_transport",
    "create_http_client",
    "proxied_url",
]
