"""CLI interface for YT Trends"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .api.summary_client import NarrativeSummarizer
from .config import config
from .errors import EmptyResultError, TrendsError
from .models import AggregationResult, DurationFilter
from .processors.query_services import (
    CategoryQueryService,
    StatsQueryService,
    TrendingQueryService,
)

app = typer.Typer(
    name="yt-trends",
    help="Browse trending YouTube videos and analyze tags, channels and categories",
)
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def format_number(n: int) -> str:
    """Compact count: 1.2K, 3.4M, 5.6B"""
    if n >= 1_000_000_000:
        return f"{n / 1_000_000_000:.1f}B"
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def format_duration(seconds: int) -> str:
    """H:MM:SS or M:SS"""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


@app.command()
def trending(
    region: str = typer.Option(config.default_region, "--region", "-r", help="Region code (e.g. US, GB)"),
    category: str = typer.Option("0", "--category", "-c", help="Category ID (0 for all)"),
    max_results: int = typer.Option(config.default_max_results, "--max-results", "-m", help="Videos to fetch (1-50)"),
    keyword: Optional[str] = typer.Option(None, "--keyword", "-k", help="Search keyword instead of the chart"),
    duration: DurationFilter = typer.Option(DurationFilter.ANY, "--duration", "-d", help="Video length filter"),
):
    """List trending videos

    Examples:
        python -m yt_trends.main trending --region GB --category 10
        python -m yt_trends.main trending -k "machine learning" -m 10
    """
    try:
        result = TrendingQueryService(config).fetch_trending(
            region.upper(), category, max_results, keyword, duration
        )
    except EmptyResultError as e:
        console.print(f"[yellow]{e.message}[/yellow]")
        return
    except TrendsError as e:
        console.print(f"[red]Error:[/red] {str(e)}", style="bold")
        raise typer.Exit(1)

    table = Table(title=f"Trending in {region.upper()} ({result.total_results} available)")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Channel")
    table.add_column("Views", justify="right")
    table.add_column("Likes", justify="right")
    table.add_column("Duration", justify="right")
    for i, video in enumerate(result.videos, 1):
        table.add_row(
            str(i),
            video.title,
            video.channel_name,
            format_number(video.view_count),
            format_number(video.like_count),
            format_duration(video.duration_seconds),
        )
    console.print(table)


@app.command()
def categories(
    region: str = typer.Option(config.default_region, "--region", "-r", help="Region code"),
):
    """List assignable video categories for a region"""
    try:
        items = CategoryQueryService(config).list_categories(region.upper())
    except TrendsError as e:
        console.print(f"[red]Error:[/red] {str(e)}", style="bold")
        raise typer.Exit(1)

    table = Table(title=f"Categories ({region.upper()})")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    for item in items:
        table.add_row(item["id"], item["title"])
    console.print(table)


def print_stats(result: AggregationResult) -> None:
    totals = result.totals
    console.print(
        f"\n[bold cyan]{totals.video_count} videos[/bold cyan]  "
        f"{format_number(totals.view_sum)} views  "
        f"{format_number(totals.like_sum)} likes  "
        f"{format_number(totals.comment_sum)} comments\n"
    )

    if result.tag_frequency:
        console.print("[bold]Top tags:[/bold] " + ", ".join(
            f"#{t.tag} ({t.count})" for t in result.tag_frequency
        ))

    channels = Table(title="Top channels")
    channels.add_column("#", justify="right")
    channels.add_column("Channel")
    channels.add_column("Videos", justify="right")
    channels.add_column("Views", justify="right")
    for i, ch in enumerate(result.channel_rollup, 1):
        channels.add_row(str(i), ch.channel_name, str(ch.video_count), format_number(ch.view_sum))
    console.print(channels)

    cats = Table(title="Top categories")
    cats.add_column("Category")
    cats.add_column("Videos", justify="right")
    for cat in result.category_rollup:
        cats.add_row(cat.display_name or cat.category_id, str(cat.video_count))
    console.print(cats)

    top = Table(title="Top videos")
    top.add_column("#", justify="right")
    top.add_column("Title")
    top.add_column("Channel")
    top.add_column("Views", justify="right")
    top.add_column("Likes", justify="right")
    top.add_column("Comments", justify="right")
    for i, v in enumerate(result.top_videos, 1):
        top.add_row(
            str(i), v.title, v.channel_name,
            format_number(v.view_count), format_number(v.like_count), format_number(v.comment_count),
        )
    console.print(top)


@app.command()
def stats(
    region: str = typer.Option(config.default_region, "--region", "-r", help="Region code"),
    max_results: int = typer.Option(50, "--max-results", "-m", help="Videos to analyze (1-50)"),
    keyword: Optional[str] = typer.Option(None, "--keyword", "-k", help="Search keyword instead of the chart"),
    duration: DurationFilter = typer.Option(DurationFilter.ANY, "--duration", "-d", help="Video length filter"),
    summary: bool = typer.Option(False, "--summary", "-s", help="Also generate a narrative summary"),
):
    """Analyze tags, channels and categories of trending videos

    Example:
        python -m yt_trends.main stats -k "ai" --summary
    """
    try:
        result = StatsQueryService(config).fetch_stats(region.upper(), max_results, keyword, duration)
    except TrendsError as e:
        console.print(f"[red]Error:[/red] {str(e)}", style="bold")
        raise typer.Exit(1)

    print_stats(result)

    if summary:
        try:
            text = NarrativeSummarizer(config).summarize(result.to_digest(region.upper(), keyword))
        except TrendsError as e:
            console.print(f"\n[yellow]Summary unavailable:[/yellow] {str(e)}")
            return
        console.print("\n[bold cyan]Summary[/bold cyan]")
        console.print(text)


if __name__ == "__main__":
    app()
