"""Terminal front end for BookScout.

Renders the top card, the remaining/liked badges and the liked-books panel
with Rich, and reads commands from the prompt. `drag` feeds a simulated
pointer drag through the gesture recognizer, so thresholds behave exactly as
they do for a real card.

Usage:
    bookscout
    bookscout --no-backend --seed 7
    python -m bookscout.client --state-file /tmp/state.json
"""

import argparse
import shlex
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from ..catalog import Catalog, GoogleBooksClient, load_catalog
from ..recommender import Book, RecommenderConfig
from ..utils import configure_logging
from .backend import BackendClient
from .config import ClientConfig
from .controller import SwipeController
from .gesture import CardOffset, GestureRecognizer, ManualScheduler, PointerEvent, SwipeDirection
from .state import JsonStateStore, MemoryStateStore

console = Console()

HELP_TEXT = """\
[bold]l[/bold] / like          like the current book
[bold]d[/bold] / dislike       pass on the current book
[bold]s[/bold] / skip          show the next book without deciding
[bold]drag[/bold] DX [MS]      drag the card DX px over MS ms (default 300)
[bold]search[/bold] QUERY      fetch books from Google Books into the deck
[bold]key[/bold] API_KEY       set the Google Books API key for searches
[bold]summary[/bold]           show the backend's choice summary
[bold]reset[/bold]             clear choices and merged books
[bold]q[/bold] / quit          exit"""


# ============================================================================
# Rendering
# ============================================================================


def print_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    console.print(f"[bold green]{message}[/bold green]")


def print_info(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def format_rating(rating: float) -> str:
    full = int(round(rating))
    return "★" * full + "☆" * (5 - full) + f" {rating:.1f}"


def render_card(book: Optional[Book]) -> Panel:
    """The top card, or the exhausted state."""
    if book is None:
        return Panel(
            "[bold]No more books![/bold]\nCome back later, or search to add more.",
            title="BookScout",
            border_style="magenta",
            width=60,
        )
    body = (
        f"[bold cyan]{escape(book.title)}[/bold cyan]\n"
        f"[green]{escape(book.author)}[/green]  ·  [yellow]{escape(book.genre)}[/yellow]\n"
        f"{format_rating(book.rating)}\n\n"
        f"{escape(book.description)}"
    )
    return Panel(body, title="BookScout", subtitle=f"id {escape(book.id)}", border_style="magenta", width=60)


def render_liked(controller: SwipeController) -> Table:
    """Liked-books panel, most recent last."""
    table = Table(title="Your liked books", show_header=True, header_style="bold magenta")
    table.add_column("Title", style="cyan", max_width=36)
    table.add_column("Author", style="green", max_width=24)
    table.add_column("Liked at", style="dim")
    for event in controller.liked:
        when = datetime.fromtimestamp(event.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
        table.add_row(escape(event.book.title), escape(event.book.author), when)
    return table


def overlay_label(offset: CardOffset) -> str:
    """LIKE/NOPE badge strength for a card offset, as shown over a dragged card."""
    like, nope = offset.like_opacity(), offset.dislike_opacity()
    if like > 0:
        return f"LIKE overlay {like:.0%}"
    if nope > 0:
        return f"NOPE overlay {nope:.0%}"
    return "No overlay"


def render(controller: SwipeController) -> None:
    console.print(render_card(controller.current))
    console.print(
        f"[bold]Remaining:[/bold] {controller.remaining}   [bold]Liked:[/bold] {len(controller.liked)}"
    )
    if controller.liked:
        console.print(render_liked(controller))


def render_summary(summary: Optional[dict]) -> None:
    if summary is None:
        print_error("Failed to fetch summary from backend (is it running?)")
        return
    console.print(
        f"[bold]Total:[/bold] {summary.get('total', 0)}   "
        f"[bold]Liked:[/bold] {summary.get('liked', 0)}   "
        f"[bold]Disliked:[/bold] {summary.get('disliked', 0)}"
    )
    table = Table(title="Most recent choices", show_header=True, header_style="bold magenta")
    table.add_column("Action")
    table.add_column("Book", style="cyan")
    for event in summary.get("last") or []:
        if not isinstance(event, dict):
            continue
        book = event.get("book") if isinstance(event.get("book"), dict) else {}
        table.add_row(escape(str(event.get("action"))), escape(str(book.get("title") or book.get("id", "?"))))
    console.print(table)


# ============================================================================
# Session
# ============================================================================


class TerminalSession:
    """Wires a controller to a gesture recognizer and the prompt loop."""

    def __init__(self, controller: SwipeController, api_key: Optional[str] = None):
        self.controller = controller
        self.api_key = api_key
        self.scheduler = ManualScheduler()
        self.gesture = GestureRecognizer(
            on_swipe_right=controller.like,
            on_swipe_left=controller.dislike,
            scheduler=self.scheduler,
        )
        # Card transform at the moment of the last release
        self.release_offset = CardOffset()

    def drag(self, dx: float, duration_ms: float = 300.0) -> Optional[SwipeDirection]:
        """Simulate a pointer drag of dx px and run the resulting animation."""
        self.gesture.pointer_down(PointerEvent(pointer_id=1, x=0.0, y=0.0, time_ms=0.0))
        self.gesture.pointer_move(PointerEvent(pointer_id=1, x=dx / 2, y=0.0, time_ms=duration_ms / 2))
        self.gesture.pointer_move(PointerEvent(pointer_id=1, x=dx, y=0.0, time_ms=duration_ms))
        self.release_offset = self.gesture.offset
        direction = self.gesture.pointer_up(PointerEvent(pointer_id=1, x=dx, y=0.0, time_ms=duration_ms))
        self.scheduler.run_all()
        return direction

    def handle(self, line: str) -> bool:
        """Run one command. Returns False when the user asked to quit."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            print_error(escape(str(e)))
            return True
        if not parts:
            return True
        cmd, args = parts[0].lower(), parts[1:]
        controller = self.controller

        if cmd in ("q", "quit", "exit"):
            return False
        if cmd in ("h", "help", "?"):
            console.print(HELP_TEXT)
        elif cmd in ("l", "like", "d", "dislike"):
            if controller.exhausted:
                print_info("No more books!")
            else:
                event = controller.like() if cmd.startswith("l") else controller.dislike()
                print_success(f"{event.action.value.capitalize()}d: {escape(event.book.title)}")
        elif cmd in ("s", "skip"):
            if not controller.skip():
                print_info("No more books to skip to.")
        elif cmd == "drag":
            self._drag(args)
        elif cmd == "search":
            self._search(" ".join(args))
        elif cmd == "key":
            self.api_key = args[0] if args else None
            print_info("API key set." if self.api_key else "API key cleared.")
        elif cmd == "summary":
            render_summary(controller.backend_summary())
        elif cmd == "reset":
            if Confirm.ask("Reset choices and dataset to initial state?", default=False):
                controller.reset()
                print_success("Reset.")
        else:
            print_error(f"Unknown command: {escape(cmd)} (type 'help')")
        return True

    def _drag(self, args: List[str]) -> None:
        try:
            dx = float(args[0])
            duration = float(args[1]) if len(args) > 1 else 300.0
        except (IndexError, ValueError):
            print_error("usage: drag DX [MS]")
            return
        if self.controller.exhausted:
            print_info("No more books!")
            return
        title = self.controller.current.title
        direction = self.drag(dx, duration)
        print_info(overlay_label(self.release_offset))
        if direction is None:
            print_info("Snapped back.")
        else:
            verb = "Liked" if direction == SwipeDirection.RIGHT else "Disliked"
            print_success(f"Swiped {direction.value}: {verb} {escape(title)}")

    def _search(self, query: str) -> None:
        if not query.strip():
            print_error("Type a search query first (e.g. 'search tolkien').")
            return
        with console.status("Fetching..."):
            outcome = self.controller.search(query, api_key=self.api_key)
        if outcome.no_results:
            print_info("No results found.")
        elif outcome.all_known:
            print_info("Fetched books already exist in dataset (no new items).")
        else:
            print_success(f"Fetched {outcome.fetched} items, added {outcome.added} new ones to dataset.")

    def run(self) -> None:
        console.print("[bold magenta]BookScout[/bold magenta]  Discover books that feel like magic. Type 'help'.")
        try:
            while True:
                render(self.controller)
                line = Prompt.ask("[bold]>[/bold]")
                if not self.handle(line):
                    break
        except (EOFError, KeyboardInterrupt):
            console.print()
        finally:
            self.gesture.dispose()


# ============================================================================
# Entry point
# ============================================================================


def build_controller(config: ClientConfig, persist: bool = True) -> SwipeController:
    catalog = Catalog(load_catalog(config.catalog_path))
    store = JsonStateStore(config.state_file) if persist else MemoryStateStore()
    backend = BackendClient(config.backend_url, timeout=config.http_timeout_seconds) if config.backend_url else None
    search_client = GoogleBooksClient(api_key=config.google_books_api_key, timeout=config.http_timeout_seconds)
    return SwipeController(
        catalog=catalog,
        state_store=store,
        backend=backend,
        search_client=search_client,
        config=RecommenderConfig(seed=config.seed),
    )


def main(argv: Optional[List[str]] = None) -> int:
    config = ClientConfig.from_env()
    parser = argparse.ArgumentParser(description="Swipe through books in the terminal")
    parser.add_argument("--backend-url", default=config.backend_url, help="Choice log backend root URL")
    parser.add_argument("--no-backend", action="store_true", help="Do not log choices to the backend")
    parser.add_argument("--state-file", type=Path, default=config.state_file, help="Where session state is kept")
    parser.add_argument("--no-persist", action="store_true", help="Keep session state in memory only")
    parser.add_argument("--catalog", type=Path, default=config.catalog_path, help="Catalog JSON file")
    parser.add_argument("--seed", type=int, default=config.seed, help="Seed for ranking jitter")
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    config.backend_url = None if args.no_backend else args.backend_url
    config.state_file = args.state_file
    config.catalog_path = args.catalog
    config.seed = args.seed

    controller = build_controller(config, persist=not args.no_persist)
    TerminalSession(controller, api_key=config.google_books_api_key).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
