#!/usr/bin/env python3
"""typeschema - Entry point."""
import sys
import os
import json
import logging
import importlib
from pathlib import Path

# Add project root and working directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
if os.getcwd() not in sys.path:
    sys.path.insert(0, os.getcwd())

import click
from colorama import Fore, Style, init

from config import app_config
from typeschema.exporter.json_exporter import JsonExporter
from typeschema.introspection.graph import derive_schema
from typeschema.reflection.reflect import reflect
from typeschema.types.classifier import ClassifierConfig, classify, classify_format

# Initialize colorama
init(autoreset=True)


def print_banner():
    """Print application banner."""
    click.echo(f"{Fore.CYAN}{'=' * 44}", err=True)
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}typeschema{Fore.CYAN}                           ║", err=True)
    click.echo(f"{Fore.CYAN}║   {Fore.WHITE}Swagger definitions from types{Fore.CYAN}       ║", err=True)
    click.echo(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}", err=True)


def load_target(target: str):
    """Import ``package.module:Name`` (or ``package.module.Name``)."""
    if ":" in target:
        module_name, _, attr_path = target.partition(":")
    else:
        module_name, _, attr_path = target.rpartition(".")

    if not module_name or not attr_path:
        raise click.ClickException(f"Invalid target '{target}', expected module:Name")

    try:
        obj = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as e:
        raise click.ClickException(f"Could not load {target}: {e}")
    return obj


def build_config(overrides) -> ClassifierConfig:
    """Classifier config from app config plus command line overrides."""
    config = ClassifierConfig()
    pairs = dict(app_config.derive.overrides)
    for item in overrides:
        name, sep, kind = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"'{item}' is not NAME=KIND", param_hint="--override")
        pairs[name.strip()] = kind.strip()

    for name, kind in pairs.items():
        try:
            config.register(name, kind)
        except ValueError:
            raise click.BadParameter(f"Unknown kind '{kind}' for {name}", param_hint="--override")
    return config


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """typeschema - Derive Swagger definitions from Python types."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the document to this file instead of stdout (relative to TYPESCHEMA_OUTPUT_DIR)",
)
@click.option(
    "--override",
    "overrides",
    multiple=True,
    help="Treat a type as a scalar, e.g. uuid.UUID=string",
)
def derive(targets, output, overrides):
    """Derive definitions for one or more types (module:Name)."""
    config = build_config(overrides)
    schemas = [
        derive_schema(load_target(t), config, ref_prefix=app_config.derive.ref_prefix)
        for t in targets
    ]

    exporter = JsonExporter(
        ref_prefix=app_config.derive.ref_prefix,
        title=app_config.title,
        version=app_config.version,
    )

    if output:
        print_banner()
        # relative paths land in the configured output directory
        output_file = Path(app_config.output_dir) / output
        document = exporter.export(output_file, schemas)
        click.echo(f"{Fore.GREEN}✅ {len(document['definitions'])} definitions written to {output_file}")
    else:
        click.echo(json.dumps(exporter.build_document(schemas), indent=2, default=str))


@cli.command()
@click.argument("target")
@click.option("--override", "overrides", multiple=True, help="Treat a type as a scalar")
def classify_type(target, overrides):
    """Show the schema kind and format of a type."""
    config = build_config(overrides)
    descriptor = reflect(load_target(target))
    kind = classify(descriptor, config)
    fmt = classify_format(descriptor)

    color = Fore.YELLOW if not kind.value else Fore.GREEN
    click.echo(f"{color}{descriptor}: {kind.name.lower()}" + (f" ({fmt.value})" if fmt.value else ""))


@cli.command()
def list_overrides():
    """List registered scalar overrides."""
    config = build_config(())
    for name, kind in sorted(config.overrides().items()):
        click.echo(f"{Fore.CYAN}{name}{Style.RESET_ALL} -> {kind.name.lower()}")


if __name__ == "__main__":
    cli()
