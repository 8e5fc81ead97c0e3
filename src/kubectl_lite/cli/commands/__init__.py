"""CLI command registration."""

from kubectl_lite.cli.commands.api_resources import register_api_resources_commands
from kubectl_lite.cli.commands.config import register_config_commands
from kubectl_lite.cli.commands.get import register_get_command

__all__ = [
    "register_api_resources_commands",
    "register_config_commands",
    "register_get_command",
]
