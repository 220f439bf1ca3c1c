"""Thin CLI wrapper for almas_enraizadas.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from almas_enraizadas import __version__
from almas_enraizadas.config import configure_logging, get_settings, print_settings_json
from almas_enraizadas.errors import AlmasError

app = typer.Typer(
    name="almas",
    help="Almas Enraizadas - wellness blog site, content and AI authoring tools",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"almas-enraizadas version {__version__}")
        raise typer.Exit()


def _echo_json(data: object) -> None:
    # Plain echo keeps long lines intact for machine consumers
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _read_file(path: str) -> str:
    file_path = Path(path)
    if not file_path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(code=1)
    return file_path.read_text(encoding="utf-8")


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Almas Enraizadas - wellness blog site, content and AI authoring tools."""
    configure_logging(get_settings().log_level)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration (secrets are never shown)."""
    settings = get_settings()
    if json_output:
        typer.echo(print_settings_json(settings))
        return

    console.print("[bold]Effective Configuration:[/bold]")
    console.print()
    console.print("[bold]Site:[/bold]")
    console.print(f"  Site URL:            {settings.site_url}")
    console.print()
    console.print("[bold]CMS:[/bold]")
    console.print(f"  Project ID:          {settings.sanity_project_id or '(not configured)'}")
    console.print(f"  Dataset:             {settings.sanity_dataset}")
    console.print(f"  API version:         {settings.sanity_api_version}")
    console.print(f"  Use CDN:             {settings.sanity_use_cdn}")
    console.print(f"  Token configured:    {bool(settings.sanity_token)}")
    console.print()
    console.print("[bold]AI:[/bold]")
    console.print(f"  API key configured:  {settings.is_ai_configured}")
    console.print(f"  Base URL:            {settings.openai_base_url}")
    console.print(f"  Chat model:          {settings.chat_model}")
    console.print(f"  Image model:         {settings.image_model}")
    console.print()
    console.print("[bold]Operational:[/bold]")
    console.print(f"  Request timeout:     {settings.request_timeout}")
    console.print(f"  Log level:           {settings.log_level}")


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Bind port")] = 8000,
    reload: Annotated[
        bool, typer.Option("--reload", help="Reload on code changes")
    ] = False,
) -> None:
    """Run the web site and API with uvicorn."""
    import uvicorn

    settings = get_settings()
    console.print(f"[green]Serving on http://{host}:{port}[/green]")
    uvicorn.run(
        "web.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("mcp")
def mcp_serve() -> None:
    """Run the MCP server over stdio."""
    from mcp_server import mcp

    mcp.run()


# Content commands


content_app = typer.Typer(help="Read published content from the CMS")
app.add_typer(content_app, name="content")


@content_app.command("posts")
def content_posts(
    section: Annotated[
        str | None,
        typer.Option("--section", "-s", help="Filter by section slug"),
    ] = None,
    tag: Annotated[
        str | None,
        typer.Option("--tag", "-t", help="Filter by tag slug"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List published posts, newest first."""
    from almas_enraizadas.content import service
    from almas_enraizadas.content.client import get_client

    client = get_client(get_settings())
    try:
        if section:
            posts = service.fetch_posts_by_section(client, section)
        elif tag:
            posts = service.fetch_posts_by_tag(client, tag)
        else:
            posts = service.fetch_all_posts(client)
    except AlmasError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1) from None
    finally:
        client.close()

    if not posts:
        if json_output:
            typer.echo("[]")
        else:
            console.print("[yellow]No posts found[/yellow]")
        return

    if json_output:
        _echo_json(
            [
                {
                    "id": p.id,
                    "title": p.title,
                    "slug": p.slug.current,
                    "path": p.path,
                    "published_at": p.published_at,
                    "author": p.author.name if p.author else None,
                    "section": p.section.title if p.section else None,
                }
                for p in posts
            ]
        )
        return

    console.print(f"[bold]Found {len(posts)} post(s):[/bold]")
    console.print()
    for p in posts:
        console.print(f"  [green]{p.title}[/green]")
        console.print(f"    Path: {p.path}")
        if p.author:
            console.print(f"    Author: {p.author.name}")
        if p.published_at:
            console.print(f"    Published: {p.published_at}")
        console.print()


@content_app.command("post")
def content_post(
    slug: Annotated[str, typer.Argument(help="Post slug")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show one post with its plain-text body."""
    from almas_enraizadas.content import service
    from almas_enraizadas.content.client import get_client
    from almas_enraizadas.portable_text.extract import extract_plain_text

    client = get_client(get_settings())
    try:
        post = service.fetch_post_by_slug(client, slug)
    except AlmasError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1) from None
    finally:
        client.close()

    if post is None:
        console.print(f"[red]Post not found: {slug}[/red]")
        raise typer.Exit(code=1)

    text = extract_plain_text(post.body)
    if json_output:
        _echo_json(
            {
                "id": post.id,
                "title": post.title,
                "path": post.path,
                "excerpt": post.excerpt,
                "published_at": post.published_at,
                "text": text,
            }
        )
        return

    console.print(f"[bold]{post.title}[/bold]")
    console.print(f"Path: {post.path}")
    console.print()
    console.print(text or post.excerpt or "")


@content_app.command("sections")
def content_sections(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List sections in display order."""
    from almas_enraizadas.content import service
    from almas_enraizadas.content.client import get_client

    client = get_client(get_settings())
    try:
        sections = service.fetch_all_sections(client)
    except AlmasError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1) from None
    finally:
        client.close()

    if json_output:
        _echo_json(
            [
                {"id": s.id, "title": s.title, "slug": s.slug.current, "path": s.path}
                for s in sections
            ]
        )
        return
    if not sections:
        console.print("[yellow]No sections found[/yellow]")
        return
    for s in sections:
        console.print(f"  [green]{s.title}[/green] {s.path}")


@content_app.command("profiles")
def content_profiles(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List author profiles."""
    from almas_enraizadas.content import service
    from almas_enraizadas.content.client import get_client

    client = get_client(get_settings())
    try:
        profiles = service.fetch_all_profiles(client)
    except AlmasError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1) from None
    finally:
        client.close()

    if json_output:
        _echo_json(
            [
                {"id": a.id, "name": a.name, "role": a.role, "path": a.path}
                for a in profiles
            ]
        )
        return
    if not profiles:
        console.print("[yellow]No profiles found[/yellow]")
        return
    for a in profiles:
        role = f" ({a.role})" if a.role else ""
        console.print(f"  [green]{a.name}[/green]{role} {a.path}")


# AI commands


ai_app = typer.Typer(help="AI writing assistance")
app.add_typer(ai_app, name="ai")


@ai_app.command("generate")
def ai_generate(
    action: Annotated[
        str,
        typer.Argument(
            help="Action: summary, excerpt, seoTitle, readingTime or bodyContent"
        ),
    ],
    title: Annotated[str, typer.Option("--title", help="Article title")] = "",
    body_file: Annotated[
        str | None,
        typer.Option("--body-file", "-f", help="File with the article body text"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Generate text for an article with the chat model."""
    from almas_enraizadas.ai.service import AiRequest, generate_text

    body = _read_file(body_file) if body_file else ""
    try:
        result = generate_text(
            AiRequest(action=action, title=title, body=body), get_settings()
        )
    except AlmasError as e:
        if json_output:
            _echo_json(e.to_dict())
        else:
            console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1) from None

    if json_output:
        _echo_json({"result": result})
    else:
        typer.echo(result)


@ai_app.command("images")
def ai_images(
    prompt: Annotated[str, typer.Argument(help="Image description")],
    count: Annotated[
        int | None,
        typer.Option("--count", "-n", help="Number of images (1-4)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Generate image options and print their temporary URLs."""
    from almas_enraizadas.ai.images import ImageRequest, generate_images

    try:
        images = asyncio.run(
            generate_images(ImageRequest(prompt=prompt, count=count), get_settings())
        )
    except AlmasError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(code=1) from None

    if json_output:
        _echo_json({"images": [i.model_dump(by_alias=True) for i in images]})
        return
    console.print(f"[bold]Generated {len(images)} image(s):[/bold]")
    for i in images:
        typer.echo(i.url)


# Markdown commands


markdown_app = typer.Typer(help="Convert generated Markdown to Portable Text")
app.add_typer(markdown_app, name="markdown")


@markdown_app.command("convert")
def markdown_convert(
    path: Annotated[str, typer.Argument(help="Markdown file to convert")],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output blocks as JSON"),
    ] = False,
) -> None:
    """Convert a Markdown file into Portable Text blocks."""
    from almas_enraizadas.portable_text.parser import parse_markdown

    blocks = parse_markdown(_read_file(path))
    if json_output:
        _echo_json(blocks)
        return
    console.print(f"[bold]Converted {len(blocks)} block(s):[/bold]")
    for block in blocks:
        style = block.get("listItem") or block.get("style", "normal")
        text = "".join(child.get("text", "") for child in block.get("children", []))
        console.print(f"  [cyan]{style:<10}[/cyan] {text}")


@app.command("reading-time")
def reading_time(
    path: Annotated[str, typer.Argument(help="Text or Markdown file")],
) -> None:
    """Estimate the reading time of a text file."""
    from almas_enraizadas.formatters import calculate_reading_time, format_reading_time

    minutes = calculate_reading_time(_read_file(path))
    typer.echo(format_reading_time(minutes))


if __name__ == "__main__":
    app()
