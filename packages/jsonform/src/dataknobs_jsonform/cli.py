"""Command-line interface for checking data files against schemas.

This module provides commands for:
- Validating a data document against a schema
- Showing which validator kind a schema (or sub-schema) resolves to
- Displaying the validator tree built for a data document
"""

import json
import logging
import sys
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from . import __version__
from .binder import SchemaBinder
from .exceptions import JsonFormError
from .loader import load_document
from .nodes import ArrayNode, ObjectNode, ValidatorNode
from .pointer import resolve_pointer
from .settings import BinderSettings
from .traversal import collect_errors

console = Console()

EXIT_INVALID = 1
EXIT_ERROR = 2


def _bind(schema_file: str, data_file: str) -> ValidatorNode:
    schema = load_document(schema_file)
    data = load_document(data_file)
    binder = SchemaBinder(schema, settings=BinderSettings.from_env())
    return binder.bind(schema, data)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """JSON form validator - bind data documents to JSON schemas"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command()
@click.argument('schema_file', type=click.Path(exists=True))
@click.argument('data_file', type=click.Path(exists=True))
@click.option('--format', '-f', 'output_format', type=click.Choice(['text', 'json']), default='text')
def validate(schema_file: str, data_file: str, output_format: str):
    """Validate DATA_FILE against SCHEMA_FILE"""
    try:
        node = _bind(schema_file, data_file)
    except JsonFormError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(EXIT_ERROR)

    errors = collect_errors(node)
    is_valid = node.valid()

    if output_format == 'json':
        click.echo(json.dumps({'valid': is_valid, 'errors': errors, 'value': node.value()}, indent=2))
    elif is_valid:
        console.print("[green]✓[/green] Data is valid!")
    else:
        console.print("[red]✗[/red] Data validation failed!")
        console.print("\n[bold red]Errors:[/bold red]")
        for path, messages in errors.items():
            for message in messages:
                console.print(f"  [cyan]{escape(path)}[/cyan]: {escape(message)}")

    if not is_valid:
        sys.exit(EXIT_INVALID)


@cli.command()
@click.argument('schema_file', type=click.Path(exists=True))
@click.option('--pointer', '-p', default='#', help='Fragment pointer to a sub-schema')
def classify(schema_file: str, pointer: str):
    """Show the validator kind SCHEMA_FILE resolves to"""
    try:
        root = load_document(schema_file)
        binder = SchemaBinder(root, settings=BinderSettings.from_env())
        effective = binder.resolver.resolve(resolve_pointer(pointer, root))
        kind = binder.registry.classify(effective)
    except JsonFormError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(EXIT_ERROR)

    console.print(f"[bold]{escape(pointer)}[/bold] -> [green]{kind.name}[/green]")
    console.print(f"  Node: {kind.node_class.__name__}")
    console.print(f"  Inline: {kind.node_class.inline}")


@cli.command()
@click.argument('schema_file', type=click.Path(exists=True))
@click.argument('data_file', type=click.Path(exists=True))
def show(schema_file: str, data_file: str):
    """Display the validator tree for DATA_FILE"""
    try:
        node = _bind(schema_file, data_file)
    except JsonFormError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(EXIT_ERROR)

    tree = Tree(_describe("$", node))
    _add_children(tree, node)
    console.print(tree)


def _describe(label: Any, node: ValidatorNode) -> str:
    status = "[green]✓[/green]" if node.valid() else "[red]✗[/red]"
    text = f"{status} [bold]{escape(str(label))}[/bold] [dim]({node.kind})[/dim]"
    if node.inline:
        text += f" = {escape(repr(node.value()))}"
    if node.first_error:
        text += f" [red]{escape(node.first_error)}[/red]"
    return text


def _add_children(tree: Tree, node: ValidatorNode) -> None:
    if isinstance(node, ObjectNode):
        children = [(node.label(key), child) for key, child in node.properties.items()]
    elif isinstance(node, ArrayNode):
        children = [(f"[{i}]", child) for i, child in enumerate(node.items)]
    else:
        return
    for label, child in children:
        _add_children(tree.add(_describe(label, child)), child)


def main():
    cli()


if __name__ == '__main__':
    main()
