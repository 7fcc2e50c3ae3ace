"""Kida environment setup and rendering.

The environment is created once when the app freezes and passed
through the request pipeline.
"""

from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from routeprobe.config import AppConfig


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment from app configuration.

    ``config.template_dir``, when set, is searched before the packaged
    templates so a deployment can restyle the page.
    """
    loaders = []
    if config.template_dir is not None:
        loaders.append(FileSystemLoader(str(config.template_dir)))
    loaders.append(PackageLoader("routeprobe", "templates"))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )


def render_template(env: Environment, name: str, context: dict[str, Any]) -> str:
    """Render a full template to string."""
    template = env.get_template(name)
    return template.render(context)
