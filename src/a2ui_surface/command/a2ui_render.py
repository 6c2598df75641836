from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import click
import yaml

from a2ui_surface.command.command_utils import get_log_dir, get_package_root
from a2ui_surface.common.logger import setup_logging
from a2ui_surface.error_codes import ConfigError
from a2ui_surface.session import SurfaceSession, surface_summaries
from a2ui_surface.settings import configure_renderer
from a2ui_surface.text_renderer import DEFAULT_WIDTH, render_text
from a2ui_surface.util.file_utils import from_json_or_yaml, load_messages

PACKAGE_ROOT = get_package_root()
DEFAULT_LOG_CONFIG_PATH = PACKAGE_ROOT / "configs" / "logger_config.yaml"
DEFAULT_LOG_FILE = "a2ui-render.log"


def _load_renderer_config(config_path: str) -> None:
    try:
        config = from_json_or_yaml(config_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config {config_path}: {exc}") from exc
    if not isinstance(config, dict):
        raise ConfigError(f"Config must be a mapping: {config_path}")
    configure_renderer(config)


def _echo_action(name: str, context: List[dict]) -> None:
    click.echo(f"action: {name} {json.dumps(context, ensure_ascii=False)}")


@click.command(name="a2ui-render")
@click.argument("messages_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    "-c",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML/JSON file with a renderer_config block.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output rendered surfaces as indented text or JSON node trees.",
)
@click.option("--width", default=DEFAULT_WIDTH, show_default=True, type=int, help="Text output width.")
@click.option("--summary", is_flag=True, help="Print surface summaries after the render.")
@click.option(
    "--log-config",
    default=None,
    type=click.Path(dir_okay=False),
    help="Logging config (YAML/JSON). Defaults to configs/logger_config.yaml when present.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def run(
    messages_path: str,
    config: Optional[str],
    output_format: str,
    width: int,
    summary: bool,
    log_config: Optional[str],
    verbose: bool,
) -> None:
    """Render the A2UI surfaces described by MESSAGES_PATH (JSON array or JSON Lines)."""
    log_config_path: Any = log_config or (DEFAULT_LOG_CONFIG_PATH if DEFAULT_LOG_CONFIG_PATH.exists() else None)
    log_file_path = get_log_dir() / DEFAULT_LOG_FILE if log_config_path is not None else None
    logger = setup_logging(
        config_file_path=log_config_path,
        log_file_path=log_file_path,
        verbose=verbose,
    )

    if config:
        try:
            _load_renderer_config(config)
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc

    try:
        messages = load_messages(messages_path)
    except (OSError, ValueError) as exc:
        raise click.ClickException(f"Cannot read messages from {messages_path}: {exc}") from exc

    logger.info("Rendering %d message(s) from %s", len(messages), messages_path)
    session = SurfaceSession()
    session.process_messages(messages)
    tree = session.render(on_action=_echo_action)

    if tree is None:
        click.echo("No surfaces.")
    elif output_format.lower() == "json":
        click.echo(json.dumps(tree.to_dict(), ensure_ascii=False, indent=2))
    else:
        click.echo(render_text(tree, width=width))

    if summary:
        click.echo(
            json.dumps(
                {"session": session.to_dict(), "surfaces": surface_summaries(session.surfaces)},
                ensure_ascii=False,
                indent=2,
            )
        )
    session.close()


if __name__ == "__main__":
    run()
