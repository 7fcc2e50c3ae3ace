"""Routeprobe — paste a routes table, submit a request, see what matches.

Core usage::

    from routeprobe import build_table, recognize

    table = build_table("get /users/:id, to: 'users#show'")
    recognize(table, "GET", "/users/42")
    # {'controller': 'users', 'action': 'show', 'id': '42'}

Web front-end::

    from routeprobe import App

    App().run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "InvalidRoutesError",
    "MethodNotAllowed",
    "NoMatchingRouteError",
    "NotFound",
    "Result",
    "RouteSyntaxError",
    "RouteTable",
    "RouteprobeError",
    "assemble",
    "build_table",
    "describe",
    "recognize",
]

# Public name -> defining module. Resolved on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "App": "routeprobe.app",
    "AppConfig": "routeprobe.config",
    "ConfigurationError": "routeprobe.errors",
    "HTTPError": "routeprobe.errors",
    "InvalidRoutesError": "routeprobe.errors",
    "MethodNotAllowed": "routeprobe.errors",
    "NoMatchingRouteError": "routeprobe.errors",
    "NotFound": "routeprobe.errors",
    "Result": "routeprobe.result",
    "RouteSyntaxError": "routeprobe.errors",
    "RouteTable": "routeprobe.routing",
    "RouteprobeError": "routeprobe.errors",
    "assemble": "routeprobe.result",
    "build_table": "routeprobe.routing",
    "describe": "routeprobe.result",
    "recognize": "routeprobe.routing",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routeprobe`` fast and free of the kida import for
    callers that only use the routing engine.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
