# tradecore/cli/runner.py

"""Headless CLI: run the demo transactions and render the store."""

import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from tradecore.context import AppContext
from tradecore.errors import TransactionError
from tradecore.models.enums import (
    OrderStatus,
    ProductCategory,
    ProductCondition,
    ProductStatus,
    UserRole,
)
from tradecore.services.notifier import MessageInbox
from tradecore.services.reputation import reputation_level
from tradecore.services.results import attempt
from tradecore.storage.snapshot import SnapshotManager
from tradecore.storage.store import Store

logger = logging.getLogger("tradecore.cli")

# Stderr console for status messages so stdout stays clean for tables
_err = Console(stderr=True)

_STATUS_STYLES: dict[object, str] = {
    ProductStatus.AVAILABLE: "green",
    ProductStatus.RESERVED: "yellow",
    ProductStatus.SOLD: "cyan",
    ProductStatus.REMOVED: "dim",
    OrderStatus.PENDING: "yellow",
    OrderStatus.CONFIRMED: "blue",
    OrderStatus.COMPLETED: "green",
    OrderStatus.CANCELLED: "red",
}


def _styled(status: ProductStatus | OrderStatus) -> str:
    style = _STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.label}[/{style}]"


# ── Rendering ────────────────────────────────────────────


def users_table(store: Store) -> Table:
    table = Table(title="Users", show_lines=True, title_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Username", style="bold")
    table.add_column("Roles")
    table.add_column("Status", justify="center")
    table.add_column("Reputation", justify="right", style="green")
    table.add_column("Level", justify="center")

    for u in store.users.all():
        table.add_row(
            u.user_id,
            u.username,
            ", ".join(sorted(r.label for r in u.roles)),
            u.status.label,
            str(u.reputation),
            reputation_level(u.reputation),
        )
    return table


def products_table(store: Store) -> Table:
    table = Table(
        title="Products", show_lines=True, title_style="bold cyan",
    )
    table.add_column("ID", style="dim")
    table.add_column("Title", max_width=40)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Category")
    table.add_column("Condition")
    table.add_column("Status", justify="center")
    table.add_column("Seller", style="magenta")

    for p in store.products.all():
        table.add_row(
            p.product_id,
            p.title,
            f"{p.price:,.2f}",
            p.category.label,
            p.condition.label,
            _styled(p.status),
            p.seller_id,
        )
    return table


def orders_table(store: Store) -> Table:
    table = Table(title="Orders", show_lines=True, title_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Product")
    table.add_column("Buyer", style="magenta")
    table.add_column("Seller", style="magenta")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Status", justify="center")
    table.add_column("Cancel reason", style="dim")

    for o in store.orders.all():
        table.add_row(
            o.order_id,
            o.product_id,
            o.buyer_id,
            o.seller_id,
            f"{o.price:,.2f}",
            _styled(o.status),
            o.cancel_reason or "—",
        )
    return table


def print_store(store: Store) -> None:
    """Render users, products and orders to stdout."""
    console = Console()
    console.print(users_table(store))
    console.print(products_table(store))
    console.print(orders_table(store))


# ── Demo ─────────────────────────────────────────────────


def run_demo(ctx: AppContext) -> dict[str, MessageInbox]:
    """Play a completed sale and a cancelled sale on *ctx*.

    Returns the live inboxes of the participants, keyed by username.
    """
    seller = ctx.users.register(
        "seller01", "password123", {UserRole.SELLER},
    )
    alice = ctx.users.register(
        "alice01", "password123", {UserRole.BUYER},
    )
    bob = ctx.users.register(
        "bob01", "password123", {UserRole.BUYER, UserRole.SELLER},
    )

    inboxes: dict[str, MessageInbox] = {}
    for user in (seller, alice, bob):
        inbox = MessageInbox(user.user_id)
        ctx.notifier.subscribe(user.user_id, inbox)
        inboxes[user.username] = inbox

    phone = ctx.products.publish(
        seller,
        "Used phone",
        "128GB, minor scratches",
        100.00,
        ProductCategory.ELECTRONICS,
        ProductCondition.GOOD,
    )
    book = ctx.products.publish(
        seller,
        "Algorithms textbook",
        "Third edition",
        45.50,
        ProductCategory.BOOKS,
        ProductCondition.LIKE_NEW,
    )

    # Completed sale followed by a review
    order = ctx.transactions.create_order(alice, phone.product_id)
    ctx.transactions.confirm_order(seller, order.order_id)
    ctx.transactions.confirm_receipt(alice, order.order_id)
    ctx.reviews.create_review(alice, order.order_id, 5, "Fast shipping")

    # Second buyer loses the race for the same listing
    late = attempt(ctx.transactions.create_order, bob, phone.product_id)
    if not late.ok:
        _err.print(f"[yellow]Expected rejection: {late.detail}[/yellow]")

    # Cancelled sale returns the listing to the catalogue
    pending = ctx.transactions.create_order(bob, book.product_id)
    ctx.transactions.cancel_order(bob, pending.order_id, "changed mind")

    logger.info("Demo finished: %s", ctx.store.counts())
    return inboxes


def cli_demo(snapshot_path: str | None) -> int:
    """Run the demo, print the resulting store and optionally save it."""
    ctx = AppContext()
    try:
        run_demo(ctx)
    except TransactionError as exc:
        logger.error("Demo failed: %s", exc, exc_info=True)
        _err.print(f"[red]Demo failed: {exc.message}[/red]")
        return 1

    print_store(ctx.store)

    if snapshot_path is not None:
        path = SnapshotManager(Path(snapshot_path)).save(ctx.store)
        _err.print(f"[dim]Snapshot saved → {path}[/dim]")
    return 0


def cli_show(snapshot_path: str) -> int:
    """Load a snapshot and print its tables."""
    store = Store()
    count = SnapshotManager(Path(snapshot_path)).load(store)
    if count == 0:
        _err.print(
            f"[yellow]No entities loaded from {snapshot_path}.[/yellow]"
        )
        return 1
    _err.print(f"[green]✓ Loaded {count} entities[/green]")
    print_store(store)
    return 0
