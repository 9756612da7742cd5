"""Access to the lifespan-owned bridge from a tool call."""

from fastmcp.server.context import Context

from sql_bridge.bridge import SqlBridge


def get_bridge(ctx: Context | None) -> SqlBridge:
    """Return the bridge created by the server lifespan."""
    if ctx is None:
        raise RuntimeError("Context not injected")
    bridge: SqlBridge = ctx.lifespan_context["bridge"]
    return bridge
