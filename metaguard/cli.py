"""
CLI for MetaGuard

Commands:
    docs    - Generate an OpenAPI document from a Flask app's guarded routes

Usage:
    metaguard docs myservice.app:app -o swagger.json
    metaguard docs myservice.app:create_app --title "Book Store" --api-version 1.0.2
"""

import importlib
import json
import logging
import sys
from pathlib import Path

import click
from flask import Flask

from .config import Config
from .docs import build_document


def load_app(import_path: str) -> Flask:
    """
    Load a Flask app from "module:attribute".

    The attribute may be the app itself or a factory returning it. Without an
    attribute, ``app`` and then ``create_app`` are tried.
    """
    module_name, _, attr = import_path.partition(':')
    # Resolve app modules relative to where the command is run
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    module = importlib.import_module(module_name)
    candidates = [attr] if attr else ['app', 'create_app']
    for name in candidates:
        target = getattr(module, name, None)
        if target is None:
            continue
        if isinstance(target, Flask):
            return target
        if callable(target):
            app = target()
            if isinstance(app, Flask):
                return app
        raise click.BadParameter(f"'{name}' in {module_name} is not a Flask app or app factory")

    raise click.BadParameter(f"No Flask app found in {import_path}")


@click.group()
@click.version_option(version="1.0.0", prog_name="metaguard")
def cli():
    """MetaGuard CLI - request guards and OpenAPI documentation for Flask."""
    logging.basicConfig(level=Config.LOG_LEVEL)


@cli.command("docs")
@click.argument("app_path")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None, help="Output file (default: METAGUARD_DOCS_OUTPUT)")
@click.option("--title", default=None, help="info.title of the document")
@click.option("--api-version", default=None, help="info.version of the document")
@click.option("--description", default=None, help="info.description of the document")
def docs(app_path, output, title, api_version, description):
    """Generate an OpenAPI document from APP_PATH (module:attribute)."""
    app = load_app(app_path)
    document = build_document(app, title=title, version=api_version, description=description)

    output = output or Path(Config.DOCS_OUTPUT)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(document, indent=2), encoding="utf-8")

    click.echo(f"Documented {len(document['paths'])} path(s) in {output}")


def main():
    cli()


if __name__ == "__main__":
    main()
