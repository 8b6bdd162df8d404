"""HTTP boundary: routers, session cookie dependencies, error handlers."""
