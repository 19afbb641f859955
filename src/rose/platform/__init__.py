"""Platform adapters — bind a transport to an App's event bus.

An adapter normalizes raw transport requests into ``http.request``,
reads the folded response back out of state, and serves it.
"""

from rose.platform.asgi import ASGIPlatform
from rose.platform.protocol import PlatformAdapter

__all__ = ["ASGIPlatform", "PlatformAdapter"]
