#!/usr/bin/env python3
"""
Storefront Support Interactive Chat

A command-line interface for talking to the support pipeline directly,
showing the plan, the rows the query proxy returned, and the reply.
"""

import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from supportbot.config import get_settings
from supportbot.core.chat import ChatOrchestrator, ChatOutcome, ChatTurnResult
from supportbot.core.feedback import FallbackStore, FewShotExampleCompiler
from supportbot.core.models import ConversationTurn
from supportbot.graph import QueryProxyClient
from supportbot.llm import IntentPlanner, LLMFactory, ResponseSynthesizer


console = Console()


# -----------------------------
# Display Functions
# -----------------------------


def show_header():
    """Display the application header."""
    header = Text()
    header.append("🛒 ", style="bright_magenta")
    header.append("Storefront Support", style="bold bright_cyan")
    header.append(" - Customer Chat", style="dim")

    console.print()
    console.print(Panel(
        header,
        box=box.DOUBLE,
        border_style="bright_blue",
        padding=(0, 2),
    ))
    console.print()


def show_help():
    """Display help information."""
    help_text = Text()
    help_text.append("Available Commands:\n", style="bold cyan")
    help_text.append("  help       ", style="green")
    help_text.append("- Show this help message\n")
    help_text.append("  user <id>  ", style="green")
    help_text.append("- Chat as a signed-in user (\"user\" alone signs out)\n")
    help_text.append("  reset      ", style="green")
    help_text.append("- Clear the conversation history\n")
    help_text.append("  fallbacks  ", style="green")
    help_text.append("- Show entries waiting for a human agent\n")
    help_text.append("  exit       ", style="green")
    help_text.append("- Exit the application\n\n")

    help_text.append("Example Questions:\n", style="bold cyan")
    help_text.append("  • \"What is the price of the Quantum Laptop?\"\n", style="white")
    help_text.append("  • \"Show me products in the Electronics category\"\n", style="white")
    help_text.append("  • \"What is the status of my latest order?\"\n", style="white")
    help_text.append("  • \"Can you give me a discount?\"\n", style="white")

    console.print(Panel(
        help_text,
        title="[bold]Help[/bold]",
        border_style="dim",
    ))


def show_plan(result: ChatTurnResult):
    """Display the intent and Cypher the planner chose."""
    if result.plan is None:
        return

    console.print(f"[bold cyan]Intent:[/bold cyan] {result.plan.intent}")
    if result.plan.query:
        syntax = Syntax(result.plan.query, "cypher", theme="monokai", line_numbers=False)
        console.print(Panel(
            syntax,
            title="[bold yellow]Generated Cypher[/bold yellow]",
            border_style="yellow",
        ))
    if result.plan.parameters:
        console.print(f"[bold cyan]Parameters:[/bold cyan] {json.dumps(result.plan.parameters)}")


def show_rows(rows):
    """Display rows returned by the query proxy."""
    if not isinstance(rows, list):
        return
    if not rows:
        console.print("[dim]No rows returned.[/dim]")
        return

    columns = list(rows[0].keys()) if isinstance(rows[0], dict) else ["value"]
    table = Table(
        title=f"[bold cyan]Rows ({len(rows)})[/bold cyan]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    for col in columns:
        table.add_column(str(col), style="cyan")

    for row in rows[:20]:  # Limit display to 20 rows
        values = [row.get(col) for col in columns] if isinstance(row, dict) else [row]
        table.add_row(*[str(v) if v is not None else "null" for v in values])

    if len(rows) > 20:
        console.print(f"[dim](Showing first 20 of {len(rows)} rows)[/dim]")

    console.print(table)


def show_reply(result: ChatTurnResult):
    """Display the assistant's reply, colored by how it was produced."""
    style = "green" if result.outcome == ChatOutcome.ANSWERED else "yellow"
    console.print(Panel(
        result.reply,
        title=f"[bold {style}]Assistant ({result.outcome.value})[/bold {style}]",
        border_style=style,
    ))


def show_fallbacks(store: FallbackStore):
    """Display fallback entries, pending ones first."""
    entries = sorted(store.list(), key=lambda e: e.is_resolved)
    if not entries:
        console.print("[dim]No fallback entries.[/dim]")
        return

    table = Table(
        title=f"[bold cyan]Fallback Entries ({len(entries)})[/bold cyan]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Timestamp", style="dim")
    table.add_column("User Query", style="cyan")
    table.add_column("Bot Reply", style="white")
    table.add_column("Human Reply", style="green")

    for entry in entries:
        table.add_row(
            entry.timestamp,
            entry.user_query,
            entry.llm_reply,
            entry.human_reply or "[yellow]pending[/yellow]",
        )

    console.print(table)


def show_error(title: str, message: str):
    """Display an error message."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


# -----------------------------
# Main Processing
# -----------------------------


def build_orchestrator(store: FallbackStore) -> tuple[ChatOrchestrator, IntentPlanner]:
    """Wire the pipeline the same way the backend does."""
    settings = get_settings()
    llm = LLMFactory.create_from_settings()
    planner = IntentPlanner(llm=llm)

    orchestrator = ChatOrchestrator(
        planner=planner,
        query_runner=QueryProxyClient.from_settings(),
        synthesizer=ResponseSynthesizer(llm=llm),
        fallback_recorder=store,
        example_source=FewShotExampleCompiler(store),
        max_history_turns=settings.history_max_turns,
    )
    return orchestrator, planner


def process_message(
    message: str,
    orchestrator: ChatOrchestrator,
    history: list[ConversationTurn],
    user_id: str | None,
) -> list[ConversationTurn]:
    """Answer one message and return the new history."""
    console.print()
    with console.status("[bold cyan]Thinking...[/bold cyan]", spinner="dots"):
        result = asyncio.run(orchestrator.handle(message, history=history, user_id=user_id))

    show_plan(result)
    show_rows(result.db_result)
    show_reply(result)
    if result.fallback_entry is not None:
        console.print(f"[dim]Logged for human review at {result.fallback_entry.timestamp}[/dim]")
    console.print()
    return result.history


def main():
    """Main entry point."""
    show_header()

    # Initialize components
    console.print("[dim]Initializing...[/dim]")

    try:
        settings = get_settings()
        store = FallbackStore(settings.fallback_store_path)
        orchestrator, planner = build_orchestrator(store)

        console.print(f"[green]✓[/green] Query proxy: [cyan]{settings.mcp_url}[/cyan]")
        console.print(f"[green]✓[/green] Using LLM: [cyan]{planner.model_info}[/cyan]")
        console.print(f"[green]✓[/green] Prompt version: [cyan]{planner.prompt_version}[/cyan]")
        console.print(f"[green]✓[/green] Fallback store: [cyan]{store.path}[/cyan]")

    except Exception as e:
        show_error("Initialization Error", str(e))
        console.print("\n[dim]Make sure your .env file is configured correctly.[/dim]")
        sys.exit(1)

    console.print()
    console.print("[dim]Type 'help' for available commands, or ask a question.[/dim]")
    console.print()

    history: list[ConversationTurn] = []
    user_id: str | None = None

    # Main loop
    while True:
        try:
            prompt_label = f"🛒 {user_id}" if user_id else "🛒 You"
            message = Prompt.ask(f"[bold magenta]{prompt_label}[/bold magenta]").strip()

            if not message:
                continue

            command = message.lower()
            if command in ("exit", "quit", "q"):
                console.print("\n[dim]Goodbye! 👋[/dim]\n")
                break

            if command == "help":
                show_help()
                continue

            if command == "reset":
                history = []
                console.print("[dim]Conversation history cleared.[/dim]")
                continue

            if command == "fallbacks":
                show_fallbacks(store)
                continue

            if command == "user" or command.startswith("user "):
                user_id = message[5:].strip() or None
                history = []
                console.print(f"[dim]Signed in as {user_id}.[/dim]" if user_id else "[dim]Signed out.[/dim]")
                continue

            history = process_message(message, orchestrator, history, user_id)

        except KeyboardInterrupt:
            console.print("\n[dim]Goodbye! 👋[/dim]\n")
            break
        except Exception as e:
            show_error("Unexpected Error", str(e))


if __name__ == "__main__":
    main()
