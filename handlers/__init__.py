from .middleware import error_middleware, identity_middleware, CALLER_ID
from .wall       import wall_routes, SERVICE_KEY

__all__ = [
    "error_middleware", "identity_middleware", "CALLER_ID",
    "wall_routes", "SERVICE_KEY",
]
