# ABOUTME: Routes module initialization.
# ABOUTME: Exports all route modules for the FastAPI app, in registration order.

from trifecta_edge.web.routes import api, assets, newsletter, preflight

__all__ = ["api", "assets", "newsletter", "preflight"]
