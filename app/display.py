"""Rich terminal rendering for the SkillSwap CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from shared.models import UserIdentity
from shared.notifications import Notification
from modules.profiles.formatting import format_availability, format_rating
from modules.profiles.models import Feedback, UserProfile
from modules.swaps.models import SwapRequest, SwapStatus

console = Console()

STATUS_STYLES = {
    SwapStatus.PENDING: "yellow",
    SwapStatus.ACCEPTED: "green",
    SwapStatus.REJECTED: "red",
    SwapStatus.CANCELLED: "dim",
    SwapStatus.COMPLETED: "cyan",
}


def configure_logging(level: str = "INFO") -> None:
    """Route log records through rich so they share the console."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def print_notification(notification: Notification) -> None:
    """Render a notification as a one-line toast."""
    style = "red" if notification.is_error else "green"
    line = f"[bold {style}]{notification.title}[/bold {style}]"
    if notification.description:
        line += f" {notification.description}"
    console.print(line)


def print_user(user: UserIdentity) -> None:
    role = " [magenta](admin)[/magenta]" if user.is_admin else ""
    console.print(f"[bold]{user.name}[/bold] <{user.email}>{role}")
    if user.location:
        console.print(f"[dim]{user.location}[/dim]")


def _party(user: UserIdentity | None, user_id: str) -> str:
    return user.name if user is not None else user_id


def swap_requests_table(requests: list[SwapRequest]) -> Table:
    """Build a table with one row per swap request."""
    table = Table(title="Swap Requests")
    table.add_column("ID", style="dim")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Offers")
    table.add_column("Wants")
    table.add_column("Status")
    table.add_column("Message", overflow="fold")

    for request in requests:
        style = STATUS_STYLES.get(request.status, "white")
        table.add_row(
            request.id,
            _party(request.requester, request.requester_id),
            _party(request.target, request.target_id),
            request.sender_skill or "-",
            request.receiver_skill or "-",
            f"[{style}]{request.status.value}[/{style}]",
            request.message or "",
        )
    return table


def profile_panel(profile: UserProfile) -> Panel:
    """Build the profile card."""
    lines = [
        f"[bold]{profile.name}[/bold]",
        f"Location: {profile.location or 'Not specified'}",
        f"Availability: {format_availability(profile.availability)}",
        f"Rating: {format_rating(profile.rating, profile.review_count)}",
        f"Offers: {', '.join(profile.offered_skill_names) or 'None'}",
        f"Wants: {', '.join(profile.wanted_skill_names) or 'None'}",
    ]
    if profile.bio:
        lines.extend(["", profile.bio])
    return Panel("\n".join(lines), title="Profile", border_style="blue")


def users_table(users: list[UserProfile], title: str = "Users") -> Table:
    """Build the user directory table."""
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Location")
    table.add_column("Offers")
    table.add_column("Wants")
    table.add_column("Availability")
    table.add_column("Rating", justify="right")

    for user in users:
        table.add_row(
            user.id,
            user.name,
            user.location or "-",
            ", ".join(user.offered_skill_names) or "-",
            ", ".join(user.wanted_skill_names) or "-",
            format_availability(user.availability),
            format_rating(user.rating, user.review_count),
        )
    return table


def feedback_table(feedback: list[Feedback]) -> Table:
    table = Table(title="Feedback & Reviews")
    table.add_column("From")
    table.add_column("Rating")
    table.add_column("Stage", style="dim")
    table.add_column("Comment", overflow="fold")
    table.add_column("Date", style="dim")

    for item in feedback:
        stars = "★" * item.rating + "☆" * (5 - item.rating)
        table.add_row(
            item.rater_name,
            f"[yellow]{stars}[/yellow]",
            item.stage,
            item.feedback or "",
            (item.created_at or "")[:10],
        )
    return table
