"""Command line front end for Pulseboard.

Every command bootstraps the store from the configured storage backend, so
changes made by one invocation are visible to the next.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.table import Table

from pulseboard.errors import PulseboardError
from pulseboard.main import Application, bootstrap, configure_logging, validate_environment
from pulseboard.schemas.blog import BlogPost, Draft
from pulseboard.schemas.news import NEWS_CATEGORIES, NewsArticle, NewsQuery
from pulseboard.services.analytics import dashboard_view
from pulseboard.services.auth import AuthService
from pulseboard.services.blog import BlogService
from pulseboard.services.bookmarks import BookmarkService
from pulseboard.services.editor import draft_from_post
from pulseboard.services.news import NewsClient, NewsFeedLoader
from pulseboard.settings import AppSettings
from pulseboard.store.actions import SetTheme

console = Console()

F = TypeVar("F", bound=Callable[..., Any])


def _friendly_errors(func: F) -> F:
    """Turn domain errors into click errors with a readable message."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PulseboardError as exc:
            raise click.ClickException(f"[{exc.error_type.value}] {exc}") from exc

    return wrapper  # type: ignore[return-value]


def _app(ctx: click.Context) -> Application:
    return ctx.find_object(Application)


def _posts_table(posts: list[BlogPost], title: str = "Posts") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Author")
    table.add_column("Views", justify="right")
    table.add_column("Likes", justify="right")
    table.add_column("Comments", justify="right")
    table.add_column("Tags", style="magenta")
    for post in posts:
        table.add_row(
            post.id,
            post.title,
            post.author,
            str(post.views),
            str(post.likes),
            str(len(post.comments)),
            ", ".join(post.tags),
        )
    return table


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this invocation.")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Personal news, blog and analytics dashboard."""

    active_settings = AppSettings()
    if log_level:
        active_settings = active_settings.model_copy(update={"log_level": log_level})
    configure_logging(active_settings)
    validate_environment(active_settings)
    ctx.obj = bootstrap(active_settings)


# -- Session -----------------------------------------------------------------


@main.command()
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True)
@click.option("--email", default=None, help="Defaults to <username>@example.com.")
@click.pass_context
@_friendly_errors
def login(ctx: click.Context, username: str, password: str, email: str | None) -> None:
    """Sign in as USERNAME."""

    user = AuthService(_app(ctx).store).login(username, password, email=email)
    console.print(f"[green]✓ Signed in as {user.username}[/green]")


@main.command()
@click.argument("username")
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
@click.option("--confirm-password", prompt=True, hide_input=True)
@click.pass_context
@_friendly_errors
def signup(
    ctx: click.Context, username: str, email: str, password: str, confirm_password: str
) -> None:
    """Create an account for USERNAME and sign in."""

    user = AuthService(_app(ctx).store).signup(username, email, password, confirm_password)
    console.print(f"[green]✓ Welcome, {user.username}[/green]")


@main.command()
@click.pass_context
def logout(ctx: click.Context) -> None:
    """Sign out the current user."""

    AuthService(_app(ctx).store).logout()
    console.print("Signed out")


@main.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show the signed-in user."""

    user = _app(ctx).store.state.user
    if user is None:
        console.print("[yellow]Not signed in[/yellow]")
        return
    console.print(f"{user.username} <{user.email}>")


@main.command()
@click.argument("choice", required=False, type=click.Choice(["light", "dark"]))
@click.pass_context
def theme(ctx: click.Context, choice: str | None) -> None:
    """Show the theme, or set it to CHOICE."""

    store = _app(ctx).store
    if choice is not None:
        store.dispatch(SetTheme(theme=choice))
    console.print(f"Theme: {store.state.theme}")


# -- Posts -------------------------------------------------------------------


@main.group()
def posts() -> None:
    """Manage blog posts."""


@posts.command("list")
@click.option("--mine", is_flag=True, help="Only posts written by the signed-in user.")
@click.pass_context
def list_posts(ctx: click.Context, mine: bool) -> None:
    store = _app(ctx).store
    selected = BlogService(store).list_posts(store.state.viewer, mine=mine)
    if not selected:
        console.print("[yellow]No posts yet[/yellow]")
        return
    console.print(_posts_table(selected))


@posts.command("create")
@click.option("--title", required=True)
@click.option("--content", required=True)
@click.option("--excerpt", default="")
@click.option("--tags", default="", help="Comma-separated tags.")
@click.pass_context
@_friendly_errors
def create_post(ctx: click.Context, title: str, content: str, excerpt: str, tags: str) -> None:
    store = _app(ctx).store
    draft = Draft(title=title, content=content, excerpt=excerpt, tags=tags)
    post = BlogService(store).create_post(store.state.viewer, draft)
    console.print(f"[green]✓ Created post {post.id}[/green]")


@posts.command("edit")
@click.argument("post_id")
@click.option("--title", default=None)
@click.option("--content", default=None)
@click.option("--excerpt", default=None)
@click.option("--tags", default=None, help="Comma-separated tags.")
@click.pass_context
@_friendly_errors
def edit_post(
    ctx: click.Context,
    post_id: str,
    title: str | None,
    content: str | None,
    excerpt: str | None,
    tags: str | None,
) -> None:
    service = BlogService(_app(ctx).store)
    existing = service.get_post(post_id)
    if existing is None:
        raise click.ClickException(f"Post {post_id} not found")
    changes = {
        name: value
        for name, value in {"title": title, "content": content, "excerpt": excerpt, "tags": tags}.items()
        if value is not None
    }
    draft = draft_from_post(existing).model_copy(update=changes)
    service.update_post(post_id, draft)
    console.print(f"[green]✓ Updated post {post_id}[/green]")


@posts.command("delete")
@click.argument("post_id")
@click.pass_context
def delete_post(ctx: click.Context, post_id: str) -> None:
    if not BlogService(_app(ctx).store).delete_post(post_id):
        raise click.ClickException(f"Post {post_id} not found")
    console.print(f"Deleted post {post_id}")


@posts.command("view")
@click.argument("post_id")
@click.pass_context
def view_post(ctx: click.Context, post_id: str) -> None:
    """Read a post (counts as a view)."""

    post = BlogService(_app(ctx).store).view_post(post_id)
    if post is None:
        raise click.ClickException(f"Post {post_id} not found")
    console.print(f"[bold]{post.title}[/bold]")
    console.print(f"[dim]by {post.author} · {post.views} views · {post.likes} likes[/dim]\n")
    console.print(post.content)
    for comment in post.comments:
        console.print(f"\n[cyan]{comment.author}[/cyan]: {comment.content}")


@posts.command("like")
@click.argument("post_id")
@click.pass_context
@_friendly_errors
def like_post(ctx: click.Context, post_id: str) -> None:
    store = _app(ctx).store
    if store.state.find_post(post_id) is None:
        raise click.ClickException(f"Post {post_id} not found")
    liked = BlogService(store).toggle_like(store.state.viewer, post_id)
    console.print("Liked" if liked else "Like removed")


@posts.command("comment")
@click.argument("post_id")
@click.argument("text")
@click.pass_context
@_friendly_errors
def comment_post(ctx: click.Context, post_id: str, text: str) -> None:
    store = _app(ctx).store
    comment = BlogService(store).add_comment(store.state.viewer, post_id, text)
    if comment is None:
        raise click.ClickException(f"Post {post_id} not found")
    console.print(f"[green]✓ Comment added as {comment.author}[/green]")


# -- Bookmarks ---------------------------------------------------------------


@main.group()
def bookmarks() -> None:
    """Manage bookmarked news articles."""


@bookmarks.command("list")
@click.pass_context
def list_bookmarks(ctx: click.Context) -> None:
    saved = BookmarkService(_app(ctx).store).bookmarks
    if not saved:
        console.print("[yellow]No bookmarks yet[/yellow]")
        return
    table = Table(title="Bookmarks")
    table.add_column("ID", style="dim")
    table.add_column("Article", style="cyan")
    table.add_column("Saved at")
    for bookmark in saved:
        table.add_row(bookmark.id, bookmark.article_id, bookmark.created_at.isoformat())
    console.print(table)


@bookmarks.command("toggle")
@click.argument("article_id")
@click.pass_context
def toggle_bookmark(ctx: click.Context, article_id: str) -> None:
    store = _app(ctx).store
    bookmark = BookmarkService(store).toggle(store.state.viewer, article_id)
    console.print("Bookmarked" if bookmark is not None else "Bookmark removed")


# -- Analytics ---------------------------------------------------------------


@main.command()
@click.option("--source", type=click.Choice(["blog", "news"]), default="blog", show_default=True)
@click.option("--start", "start_index", type=int, default=0, help="First day index of the range.")
@click.option("--end", "end_index", type=int, default=None, help="Last day index (inclusive).")
@click.pass_context
def analytics(ctx: click.Context, source: str, start_index: int, end_index: int | None) -> None:
    """Show engagement totals, the daily series and top posts."""

    state = _app(ctx).store.state
    data, totals = dashboard_view(state, source, start_index, end_index)  # type: ignore[arg-type]

    summary = Table(title="Totals")
    for column in ("Views", "Likes", "Comments", "Posts"):
        summary.add_column(column, justify="right")
    summary.add_row(
        str(totals.total_views),
        str(totals.total_likes),
        str(totals.total_comments),
        str(totals.total_posts),
    )
    console.print(summary)

    overview = Table(title="Engagement overview")
    for column in ("Avg views / post", "Avg likes / post", "Avg comments / post"):
        overview.add_column(column, justify="right")
    overview.add_row(
        str(totals.average_views),
        str(totals.average_likes),
        str(totals.average_comments),
    )
    console.print(overview)

    series = Table(title="Daily engagement")
    series.add_column("Date")
    series.add_column("Views", justify="right")
    series.add_column("Likes", justify="right")
    series.add_column("Comments", justify="right")
    for views, likes, comments in zip(data.post_views, data.post_likes, data.comments):
        series.add_row(views.date, str(views.views), str(likes.likes), str(comments.comments))
    console.print(series)

    if data.top_posts:
        top = Table(title="Top posts")
        top.add_column("Title", style="cyan")
        top.add_column("Views", justify="right")
        top.add_column("Likes", justify="right")
        for entry in data.top_posts:
            top.add_row(entry.title, str(entry.views), str(entry.likes))
        console.print(top)


# -- News --------------------------------------------------------------------


async def _load_news(app: Application, query: NewsQuery, pages: int) -> NewsFeedLoader:
    async with NewsClient.from_settings(app.settings) as client:
        loader = NewsFeedLoader(client, app.store, query)
        for _ in range(pages):
            await loader.load_next()
            if loader.error or loader.exhausted:
                break
        return loader


@main.command()
@click.option("--category", type=click.Choice(NEWS_CATEGORIES), default="all", show_default=True)
@click.option("--search", "search_term", default="", help="Free-text search.")
@click.option("--pages", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--bookmark", "bookmark_index", type=int, default=None, help="Bookmark the Nth article (1-based).")
@click.pass_context
def news(
    ctx: click.Context,
    category: str,
    search_term: str,
    pages: int,
    bookmark_index: int | None,
) -> None:
    """Fetch headlines, optionally bookmarking one of them."""

    app = _app(ctx)
    query = NewsQuery(category=category, search_term=search_term)
    loader = asyncio.run(_load_news(app, query, pages))
    if loader.error:
        raise click.ClickException(loader.error)

    articles: list[NewsArticle] = loader.articles
    bookmark_service = BookmarkService(app.store)
    table = Table(title=f"News ({category})")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Source")
    table.add_column("Saved")
    for index, article in enumerate(articles, start=1):
        saved = "★" if bookmark_service.is_bookmarked(article.id) else ""
        table.add_row(str(index), article.title, article.source_name, saved)
    console.print(table)

    if bookmark_index is not None:
        if not 1 <= bookmark_index <= len(articles):
            raise click.ClickException(f"No article #{bookmark_index}")
        article = articles[bookmark_index - 1]
        bookmark = bookmark_service.toggle(app.store.state.viewer, article.id)
        verb = "Bookmarked" if bookmark is not None else "Removed bookmark for"
        console.print(f"{verb} {article.title}")


if __name__ == "__main__":
    main()
