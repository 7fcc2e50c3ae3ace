"""Application configuration.

AppConfig is a frozen dataclass, immutable once the app is built. The
routes table itself is never stored here; each submission brings its own.
"""

from dataclasses import dataclass
from pathlib import Path

EXAMPLE_ROUTES = """\
# One declaration per line. Lines starting with # are ignored.
get /users/:id(.:format), to: 'users#show'
post /users, to: 'users#create'
get /files/*path, to: 'files#show'
root 'pages#home'
"""


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development mode, requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".html")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Templates
    template_dir: str | Path | None = None  # Overrides the packaged templates when set
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Form
    default_routes: str = EXAMPLE_ROUTES
    default_method: str = "GET"
    default_uri: str = "/users/42?tab=posts"

    # Limits
    max_content_length: int = 1024 * 1024  # 1 MB

    # Logging
    log_level: str = "info"
