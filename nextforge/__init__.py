"""nextforge: scaffold components, configs and health checks for Next.js apps."""

__version__ = "0.1.0"
