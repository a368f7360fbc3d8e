"""ASGI adapter pieces and the pounce development server."""
