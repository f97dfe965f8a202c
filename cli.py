# cli.py - interactive client for the Product API
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.product_client import ProductClient
import requests

console = Console()
c = ProductClient(
    base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
    api_key=os.getenv("API_KEY", "secret-api-key-123"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def format_price(price: Any) -> str:
    try:
        return f"${float(price):,.2f}"
    except (TypeError, ValueError):
        return "N/A"


def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Category", width=15)
    table.add_column("Stock", width=8)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("description", ""),
            format_price(p.get("price")),
            p.get("category", "N/A"),
            stock,
        )
    console.print(table)


def show_page(result: Dict[str, Any]):
    title = (f"📦 Products - page {result.get('page')} of {result.get('totalPages')} "
             f"({result.get('total')} matching)")
    show_products(result.get("products", []), title=title)


def show_stats(stats: Dict[str, Any]):
    if not stats:
        console.print("[italic yellow]No statistics available[/italic yellow]")
        return

    summary = Table(show_header=False, box=box.SIMPLE)
    summary.add_column("Metric", style="bold")
    summary.add_column("Value", justify="right")
    summary.add_row("Total products", str(stats.get("totalProducts", 0)))
    summary.add_row("In stock", f"[green]{stats.get('totalInStock', 0)}[/green]")
    summary.add_row("Out of stock", f"[red]{stats.get('totalOutOfStock', 0)}[/red]")
    summary.add_row("Average price", format_price(stats.get("averagePrice")))
    for label, key in (("Highest priced", "highestPricedProduct"), ("Lowest priced", "lowestPricedProduct")):
        p = stats.get(key)
        summary.add_row(label, f"{p['name']} ({format_price(p['price'])})" if p else "N/A")

    categories = Table(title="🏷️ Categories", box=box.ROUNDED, header_style="bold yellow")
    categories.add_column("Category")
    categories.add_column("Count", justify="right")
    for name, count in stats.get("categories", {}).items():
        categories.add_row(name, str(count))

    console.print(Panel(summary, title="📊 Catalog Statistics", border_style="green"))
    console.print(categories)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_text(e: Exception) -> str:
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            body = e.response.json()
        except ValueError:
            return f"HTTP {e.response.status_code}"
        details = body.get("details")
        if details:
            return f"{body.get('error')}: " + "; ".join(details)
        return f"{body.get('error')}: {body.get('message')}"
    return str(e)


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded result, or None after printing the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {_error_text(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    # large limit so every product is offered for completion
    result = try_api(c.list_products, limit=1000)
    product_cache = result.get("products", []) if result else []


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    if not product_cache:
        refresh_product_cache()
    return WordCompleter(sorted({p.get("category", "") for p in product_cache if p.get("category")}),
                         ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product API",
        "[bold blue]Catalog CLI with Autocomplete[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
        "price": ask_float("💰 Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete("🏷️ Category", completer=get_category_completer(),
                                             default=current.get("category", "")),
        "in_stock": Confirm.ask("In stock?", default=current.get("inStock", True)),
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "✏️ Update product"),
            ("2", "🔍 Search products", "6", "🗑️ Delete product"),
            ("3", "ℹ️ Get product by ID", "7", "📊 Statistics"),
            ("4", "➕ Create product", "q", "👋 Quit"),
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("Category (blank for all)", completer=get_category_completer())
            stock = Prompt.ask("In stock filter", choices=["any", "true", "false"], default="any")
            page = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Per page", default=10)
            in_stock = None if stock == "any" else stock == "true"
            result = try_api(c.list_products, category or None, None, in_stock, page, limit,
                             success_msg="Products loaded successfully")
            if result is not None:
                show_page(result)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            result = try_api(c.list_products, search=term, success_msg=f"Search for '{term}' completed")
            if result is not None:
                show_page(result)

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "4":
            f = ask_product_fields()
            resp = try_api(
                c.create_product, f["name"], f["description"], f["price"], f["category"], f["in_stock"],
                success_msg=f"Product '{f['name']}' created successfully"
            )
            if resp:
                console.print(Panel(f"Created product: [green]{resp['product']['id']}[/green]"))
                refresh_product_cache()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                f = ask_product_fields(current)
                resp = try_api(
                    c.update_product, pid, f["name"], f["description"], f["price"], f["category"], f["in_stock"],
                    success_msg=f"Product {pid} updated successfully"
                )
                if resp:
                    show_products([resp["product"]])
                    refresh_product_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    refresh_product_cache()

        elif choice == "7":
            stats = try_api(c.stats, success_msg="Statistics loaded")
            if stats:
                show_stats(stats)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
