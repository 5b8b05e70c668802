"""
SkillSwap - terminal client for the SkillSwap skill-exchange API.

Log in or sign up, verify your email with a one-time code, browse the
member directory, and manage your swap requests from the terminal. The
session cookie and any pending email verification are kept in
client-local storage, so each command picks up where the previous one
left off.
"""

import argparse
import asyncio
import sys

from app.container import ServiceContainer, get_container
from app.display import (
    configure_logging,
    console,
    feedback_table,
    print_notification,
    print_user,
    profile_panel,
    swap_requests_table,
    users_table,
)
from modules.swaps.exceptions import SwapRequestValidationError
from modules.swaps.models import SwapRequest, SwapStatus, join_skills
from modules.verification.service import OtpVerificationFlow, remember_pending_verification
from modules.verification.models import VerificationState
from shared.exceptions import SkillSwapError, ValidationError


async def require_user(container: ServiceContainer):
    """Return the logged-in user, or None after telling the user to log in."""
    user = await container.auth.check_session()
    if user is None:
        console.print("[red]Error:[/red] Not logged in. Run [bold]login[/bold] first.")
    return user


async def find_request(container: ServiceContainer, request_id: str) -> SwapRequest | None:
    requests = await container.swaps.list_swap_requests()
    for request in requests:
        if request.id == request_id:
            return request
    console.print(f"[red]Error:[/red] Swap request not found: {request_id}")
    return None


# -- auth ---------------------------------------------------------------------


async def cmd_whoami(container: ServiceContainer, args: argparse.Namespace) -> int:
    user = await container.auth.check_session()
    if user is None:
        console.print("[dim]Not logged in[/dim]")
        return 1
    print_user(user)
    return 0


async def cmd_login(container: ServiceContainer, args: argparse.Namespace) -> int:
    password = args.password or console.input("Password: ", password=True)
    user = await container.auth.login(args.email, password)
    console.print("[green]Logged in[/green]")
    print_user(user)
    return 0


async def cmd_signup(container: ServiceContainer, args: argparse.Namespace) -> int:
    password = args.password or console.input("Password: ", password=True)
    user = await container.auth.signup(args.name, args.email, password, location=args.location)
    remember_pending_verification(container.pending_verifications, user.email, user.name)
    console.print(f"[green]Account created for {user.email}[/green]")
    console.print("Check your inbox, then run [bold]verify[/bold] to confirm your email.")
    return 0


async def cmd_logout(container: ServiceContainer, args: argparse.Namespace) -> int:
    await container.auth.logout()
    console.print("[dim]Logged out[/dim]")
    return 0


# -- verification ------------------------------------------------------------


async def run_verification(flow: OtpVerificationFlow, send_first: bool = False) -> VerificationState:
    """Drive a verification flow from terminal input until it finishes.

    Input is read on a worker thread so the countdown keeps ticking on
    the event loop while the prompt waits.

    Args:
        flow: The flow to drive
        send_first: Request a fresh code before prompting

    Returns:
        The state the flow ended in
    """
    async with flow:
        if send_first:
            await flow.request_code()

        console.print(f"Enter the code sent to [bold]{flow.session.email}[/bold].")
        console.print("[dim]Type r to resend a code, q to cancel.[/dim]")

        while flow.state not in (VerificationState.VERIFIED, VerificationState.CANCELLED):
            if flow.state == VerificationState.EXPIRED:
                prompt = "[red]Code expired.[/red] Resend (r) or cancel (q): "
            else:
                prompt = f"({flow.time_left}) Code: "
            answer = (await asyncio.to_thread(console.input, prompt)).strip().lower()

            try:
                if answer == "q":
                    flow.cancel()
                elif answer == "r":
                    if not flow.can_resend:
                        console.print(
                            f"[yellow]You can request a new code in {flow.time_left}.[/yellow]"
                        )
                        continue
                    await flow.resend()
                elif answer:
                    await flow.submit_code(answer)
            except ValidationError as e:
                console.print(f"[yellow]{e.message}[/yellow]")
            except SkillSwapError:
                # Already reported through the notifier
                continue

        return flow.state


async def cmd_verify(container: ServiceContainer, args: argparse.Namespace) -> int:
    flow = container.verification_flow(email=args.email, name=args.name)
    if flow is None:
        console.print("[dim]No pending email verification.[/dim]")
        return 1
    state = await run_verification(flow, send_first=args.send)
    return 0 if state == VerificationState.VERIFIED else 1


# -- swap requests ------------------------------------------------------------


async def cmd_requests_list(container: ServiceContainer, args: argparse.Namespace) -> int:
    if await require_user(container) is None:
        return 1
    requests = await container.swaps.list_swap_requests(refresh=True)
    if args.status:
        requests = [request for request in requests if request.status == SwapStatus(args.status)]
    if not requests:
        console.print("[dim]No swap requests[/dim]")
        return 0
    console.print(swap_requests_table(requests))
    return 0


async def cmd_requests_create(container: ServiceContainer, args: argparse.Namespace) -> int:
    user = await require_user(container)
    if user is None:
        return 1
    try:
        created = await container.swaps.create_swap_request(
            requester_id=user.id,
            target_id=args.target_id,
            sender_skill=join_skills(args.offer) if args.offer else None,
            receiver_skill=join_skills(args.want) if args.want else None,
            message=args.message or "",
        )
    except SwapRequestValidationError as e:
        container.notifier.error("Please select skills", e.message)
        raise
    container.notifier.success("Swap request sent!")
    console.print(swap_requests_table([created]))
    return 0


async def cmd_requests_edit(container: ServiceContainer, args: argparse.Namespace) -> int:
    if await require_user(container) is None:
        return 1
    request = await find_request(container, args.request_id)
    if request is None:
        return 1

    form = container.edit_swap_request_form()
    form.open(request)
    if args.offer is not None:
        form.set_sender_skill(join_skills(args.offer))
    if args.want is not None:
        form.set_receiver_skill(join_skills(args.want))
    if args.message is not None:
        form.set_message(args.message)

    try:
        updated = await form.submit()
    except SkillSwapError:
        # Already reported through the notifier
        return 1
    console.print(swap_requests_table([updated]))
    return 0


async def cmd_requests_status(container: ServiceContainer, args: argparse.Namespace) -> int:
    if await require_user(container) is None:
        return 1
    updated = await container.swaps.update_status(args.request_id, SwapStatus(args.status))
    container.notifier.success(f"Request {updated.status.value}")
    return 0


async def cmd_requests_delete(container: ServiceContainer, args: argparse.Namespace) -> int:
    if await require_user(container) is None:
        return 1
    await container.swaps.delete_swap_request(args.request_id)
    container.notifier.success("Request deleted")
    return 0


# -- profiles -----------------------------------------------------------------


async def cmd_profile(container: ServiceContainer, args: argparse.Namespace) -> int:
    user_id = args.user_id
    if user_id is None:
        user = await require_user(container)
        if user is None:
            return 1
        user_id = user.id
    profile = await container.profiles.get_user(user_id)
    console.print(profile_panel(profile))
    return 0


async def cmd_users_list(container: ServiceContainer, args: argparse.Namespace) -> int:
    per_page = args.per_page or container.settings.users_per_page
    page = await container.profiles.list_users(page=args.page, per_page=per_page)
    if not page.data:
        console.print("[dim]No users found[/dim]")
        return 0
    console.print(users_table(page.data))
    nav = f"Page {page.current_page} of {page.total_pages} ({page.total_count} users)"
    if page.has_next_page:
        nav += f", next: --page {page.current_page + 1}"
    console.print(f"[dim]{nav}[/dim]")
    return 0


async def cmd_users_search(container: ServiceContainer, args: argparse.Namespace) -> int:
    users = await container.profiles.search_users(
        term=args.term or "",
        skills=args.skill,
        dates=args.date,
        times=args.time,
    )
    if not users:
        console.print("[dim]No users match your search[/dim]")
        return 0
    console.print(users_table(users, title="Search Results"))
    return 0


async def cmd_users_feedback(container: ServiceContainer, args: argparse.Namespace) -> int:
    feedback = await container.profiles.get_feedback(args.user_id)
    if not feedback:
        console.print("[dim]No feedback available yet[/dim]")
        return 0
    console.print(feedback_table(feedback))
    return 0


async def run(args: argparse.Namespace, container: ServiceContainer | None = None) -> int:
    """Run one CLI command against the service container.

    Args:
        args: Parsed command line
        container: Container to use (defaults to the process singleton)

    Returns:
        Process exit code
    """
    container = container or get_container()
    unsubscribe = container.notifier.subscribe(print_notification)
    try:
        return await args.handler(container, args)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 2
    except SkillSwapError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1
    finally:
        unsubscribe()
        await container.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Terminal client for the SkillSwap skill-exchange API"
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: SKILLSWAP_LOG_LEVEL or INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    whoami = commands.add_parser("whoami", help="Show the logged-in user")
    whoami.set_defaults(handler=cmd_whoami)

    login = commands.add_parser("login", help="Log in with email and password")
    login.add_argument("email")
    login.add_argument("--password", "-p", help="Password (prompted if omitted)")
    login.set_defaults(handler=cmd_login)

    signup = commands.add_parser("signup", help="Create an account")
    signup.add_argument("name")
    signup.add_argument("email")
    signup.add_argument("--password", "-p", help="Password (prompted if omitted)")
    signup.add_argument("--location", help="Where you are based")
    signup.set_defaults(handler=cmd_signup)

    logout = commands.add_parser("logout", help="End the current session")
    logout.set_defaults(handler=cmd_logout)

    verify = commands.add_parser("verify", help="Verify your email with a one-time code")
    verify.add_argument("--email", help="Email to verify (default: the pending signup)")
    verify.add_argument("--name", help="Name used in the verification email")
    verify.add_argument(
        "--send",
        action="store_true",
        help="Request a fresh code before prompting",
    )
    verify.set_defaults(handler=cmd_verify)

    requests = commands.add_parser("requests", help="Manage swap requests")
    request_commands = requests.add_subparsers(dest="requests_command", required=True)

    list_cmd = request_commands.add_parser("list", help="List your swap requests")
    list_cmd.add_argument("--status", choices=[status.value for status in SwapStatus])
    list_cmd.set_defaults(handler=cmd_requests_list)

    create = request_commands.add_parser("create", help="Send a swap request")
    create.add_argument("target_id", help="User to send the request to")
    create.add_argument("--offer", nargs="+", help="Skills you offer")
    create.add_argument("--want", nargs="+", help="Skills you want")
    create.add_argument("--message", "-m")
    create.set_defaults(handler=cmd_requests_create)

    edit = request_commands.add_parser("edit", help="Edit a pending swap request")
    edit.add_argument("request_id")
    edit.add_argument("--offer", nargs="*", help="Skills you offer (replaces the current list)")
    edit.add_argument("--want", nargs="*", help="Skills you want (replaces the current list)")
    edit.add_argument("--message", "-m")
    edit.set_defaults(handler=cmd_requests_edit)

    status_cmd = request_commands.add_parser("status", help="Accept, reject, or complete a request")
    status_cmd.add_argument("request_id")
    status_cmd.add_argument("status", choices=[s.value for s in SwapStatus])
    status_cmd.set_defaults(handler=cmd_requests_status)

    delete = request_commands.add_parser("delete", help="Delete a swap request")
    delete.add_argument("request_id")
    delete.set_defaults(handler=cmd_requests_delete)

    profile = commands.add_parser("profile", help="Show a user profile")
    profile.add_argument("user_id", nargs="?", help="User ID (default: yourself)")
    profile.set_defaults(handler=cmd_profile)

    users = commands.add_parser("users", help="Browse the user directory")
    user_commands = users.add_subparsers(dest="users_command", required=True)

    users_list = user_commands.add_parser("list", help="List users a page at a time")
    users_list.add_argument("--page", type=int, default=1)
    users_list.add_argument("--per-page", type=int, help="Users per page (default: SKILLSWAP_USERS_PER_PAGE)")
    users_list.set_defaults(handler=cmd_users_list)

    search = user_commands.add_parser("search", help="Search users by name, skill, or availability")
    search.add_argument("term", nargs="?", help="Free-text search")
    search.add_argument("--skill", action="append", help="Skill name (repeatable)")
    search.add_argument("--date", action="append", help="Available dates, e.g. weekends (repeatable)")
    search.add_argument("--time", action="append", help="Available times, e.g. evening (repeatable)")
    search.set_defaults(handler=cmd_users_search)

    feedback = user_commands.add_parser("feedback", help="Show the feedback left for a user")
    feedback.add_argument("user_id")
    feedback.set_defaults(handler=cmd_users_feedback)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    container = get_container()
    configure_logging(args.log_level or container.settings.log_level)

    try:
        return asyncio.run(run(args, container))
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
