"""CLI for inspecting a markdown vault."""

import logging
from pathlib import Path

import click

from .errors import DataStoreError
from .tree.builder import DocumentTree
from .vault import Vault


def _connect(vault_path: Path, pattern: str, name: str | None) -> Vault:
    try:
        return Vault.connect(vault_path, pattern=pattern, name=name)
    except (DataStoreError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def _print_tree(tree: DocumentTree, node_id: str, depth: int = 0) -> None:
    node = tree.get(node_id)
    title = node.title or "(untitled)"
    click.echo(f"{'  ' * depth}{node.id}  {title}")
    for child_id in tree.children(node_id):
        _print_tree(tree, child_id, depth + 1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log loading progress")
def cli(verbose: bool):
    """mddb - Index a directory of markdown files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("vault_path", type=click.Path(exists=True, path_type=Path))
@click.option("--pattern", "-p", default="*.md", help="Glob for vault files")
@click.option("--name", default=None, help="Vault display name")
def tree(vault_path: Path, pattern: str, name: str | None):
    """Print the document tree of a vault."""
    vault = _connect(vault_path, pattern, name)
    click.echo(f"{vault.name} ({vault.file_count} documents)")
    _print_tree(vault.get_tree(), vault.get_tree().root_id)


@cli.command()
@click.argument("vault_path", type=click.Path(exists=True, path_type=Path))
@click.option("--pattern", "-p", default="*.md", help="Glob for vault files")
def stats(vault_path: Path, pattern: str):
    """Show document, heading and task counts for a vault."""
    vault = _connect(vault_path, pattern, None)
    click.echo(str(vault.stats()))

    if vault.failures:
        click.echo("\nSkipped Files:")
        for failure in vault.failures:
            click.echo(f"  - {failure}")


@cli.command()
@click.argument("vault_path", type=click.Path(exists=True, path_type=Path))
@click.argument("node_id", type=str)
@click.option("--pattern", "-p", default="*.md", help="Glob for vault files")
def show(vault_path: Path, node_id: str, pattern: str):
    """Show metadata, headings and checkboxes of one document."""
    vault = _connect(vault_path, pattern, None)
    node = vault.get(node_id)
    if node is None:
        raise click.ClickException(f"No document with id {node_id}")

    click.echo(f"Id:   {node.id}")
    if node.path:
        click.echo(f"File: {vault.rel_path(node.path)}")
    for key, value in node.record.metadata.to_dict().items():
        if key == "id" or not value:
            continue
        if isinstance(value, list):
            value = ", ".join(value)
        click.echo(f"{key}: {value}")

    if node.record.headings:
        click.echo("\nHeadings:")
        for heading in node.record.headings:
            click.echo(f"  {heading.render()}")

    if node.record.checkboxes:
        click.echo("\nCheckboxes:")
        for cb in node.record.checkboxes:
            click.echo(f"  [{'x' if cb.checked else ' '}] {cb.title}")


if __name__ == "__main__":
    cli()
