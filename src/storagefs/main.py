"""Main CLI entry point for storagefs."""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import click
import httpx

from .auth import static_token_provider
from .backends import PathFolderHandle
from .config import Config
from .errors import StorageError
from .filesystem import StorageFileSystem
from .models import StorageRoot
from .roots import add_local_root, builtin_roots, find_root, load_roots, merge_shortcuts


def _registry(config: Config) -> list[StorageRoot]:
    roots = builtin_roots()
    if config.roots_file:
        roots = merge_shortcuts(roots, load_roots(config.roots_file))
    return roots


def _resolve_root(ctx: click.Context) -> StorageRoot:
    opts = ctx.obj
    if opts["local"]:
        return add_local_root([], PathFolderHandle(opts["local"]))[0]
    if opts["url"]:
        return StorageRoot(slug="url", name=opts["url"], base_url=opts["url"])
    if opts["github"]:
        return find_root(builtin_roots(), "github")
    if opts["slug"]:
        return find_root(_registry(opts["config"]), opts["slug"])
    raise click.UsageError("Choose a storage root with --root, --url, --local or --github")


def _run(ctx: click.Context, action: Callable[[StorageFileSystem], Awaitable[Any]]) -> Any:
    """Run one async action against the selected root; report errors and exit 1."""
    opts = ctx.obj
    token_provider = None
    if opts["token"] and opts["user"]:
        token_provider = static_token_provider(opts["token"], opts["user"])

    async def runner() -> Any:
        root = _resolve_root(ctx)
        async with StorageFileSystem(
            root, config=opts["config"], token_provider=token_provider
        ) as fs:
            return await action(fs)

    try:
        return asyncio.run(runner())
    except httpx.HTTPStatusError as e:
        click.echo(f"Error: HTTP {e.response.status_code} for {e.request.url}", err=True)
    except (StorageError, httpx.HTTPError) as e:
        click.echo(f"Error: {e}", err=True)
    ctx.exit(1)


@click.group()
@click.option("--root", "-r", "slug", help="Slug of a registered storage root")
@click.option("--url", help="Base URL of an ad-hoc HTTP storage root")
@click.option(
    "--local",
    type=click.Path(exists=True, file_okay=False),
    help="Local folder to use as the storage root",
)
@click.option("--github", is_flag=True, help="Use GitHub; paths start with owner/repo")
@click.option("--token", envvar="ACCESS_TOKEN", help="Bearer token for authenticated roots")
@click.option("--user", envvar="ACCESS_USER", help="Username paired with --token")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, slug, url, local, github, token, user, verbose):
    """storagefs - browse local folders, GitHub repos and HTTP file servers."""
    config = Config.from_env()
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {
        "config": config,
        "slug": slug,
        "url": url,
        "local": local,
        "github": github,
        "token": token,
        "user": user,
    }


@cli.command()
@click.argument("path", default="/")
@click.pass_context
def ls(ctx, path: str):
    """List a directory. Folders are printed with a trailing slash.

    Examples:
        storagefs --url https://svn.example.org/public ls /data/
        storagefs --github ls owner/repo/docs
    """
    listing = _run(ctx, lambda fs: fs.list_directory(path))
    for name in listing.dirs:
        click.echo(f"{name}/")
    for name in listing.files:
        click.echo(name)


@cli.command()
@click.argument("path")
@click.option("--json", "as_json", is_flag=True, help="Parse (and gunzip) as JSON")
@click.pass_context
def cat(ctx, path: str, as_json: bool):
    """Print a file. Wildcards in the file name must match exactly one file."""

    async def action(fs: StorageFileSystem) -> Any:
        real_path = await fs.expand_wildcard(path)
        if as_json:
            return json.dumps(await fs.read_json(real_path), indent=2)
        return await fs.read_text(real_path)

    click.echo(_run(ctx, action))


@cli.command()
@click.argument("folder", default="/")
@click.pass_context
def configs(ctx, folder: str):
    """Show the dashboard/topsheet/viz/config YAMLs that apply to FOLDER."""
    found = _run(ctx, lambda fs: fs.find_yaml_configs(folder))
    for kind, files in found.model_dump().items():
        click.echo(f"{kind}:")
        for name, full_path in files.items():
            click.echo(f"  {name}: {full_path}")


@cli.command()
@click.option("--all", "show_all", is_flag=True, help="Include hidden roots")
@click.pass_context
def roots(ctx, show_all: bool):
    """List registered storage roots."""
    for root in _registry(ctx.obj["config"]):
        if root.hidden and not show_all:
            continue
        click.echo(f"{root.slug}\t{root.kind.value}\t{root.base_url}")


if __name__ == "__main__":
    cli()
