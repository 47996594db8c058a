"""
Click CLI for Project Thunder authentication.

Usage:
    thunder login jane@example.com
    thunder status
    thunder logout
"""

import functools
import logging
import sys
from dataclasses import dataclass, replace
from typing import Optional

import click

from src.network.errors import APIError

from .config import ThunderConfig
from .exceptions import ThunderAuthError
from .models import AuthResponse
from .service import AuthService

logger = logging.getLogger(__name__)


@dataclass
class CLIContext:
    """Context object passed to all CLI commands.

    Attributes:
        config: Client configuration
        auth: Authentication service
        verbose: Verbose output enabled
    """
    config: ThunderConfig
    auth: AuthService
    verbose: bool


def print_error(message: str) -> None:
    """Print error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def print_success(message: str) -> None:
    """Print success message."""
    click.secho(message, fg="green")


def print_warning(message: str) -> None:
    """Print warning message."""
    click.secho(f"Warning: {message}", fg="yellow")


def format_time_remaining(seconds: float) -> str:
    """
    Format seconds into human-readable time remaining.

    Returns:
        Formatted string (e.g., "2h 15m", "45m", "expired")
    """
    if seconds <= 0:
        return "expired"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    elif minutes > 0:
        return f"{minutes}m"
    else:
        return f"{int(seconds)}s"


def handle_errors(func):
    """Report API and local auth errors and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except APIError as e:
            logger.debug(f"Command failed: {e!r}")
            print_error(e.description)
            sys.exit(1)
        except ThunderAuthError as e:
            print_error(str(e))
            sys.exit(1)

    return wrapper


def report(response: AuthResponse, success_message: str) -> None:
    """Print the outcome of an auth call; exit 1 on an application-level failure."""
    if response.is_success:
        print_success(response.message or success_message)
    elif response.requires_two_factor:
        print_warning(response.message or "Two-factor code required")
    else:
        print_error(response.message or f"Request failed with status {response.status}")
        sys.exit(1)


@click.group()
@click.option("--base-url", envvar="THUNDER_API_BASE_URL", help="API server URL")
@click.option("--token-dir", envvar="THUNDER_TOKEN_DIR", help="Token storage directory")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(
    ctx: click.Context,
    base_url: Optional[str],
    token_dir: Optional[str],
    verbose: bool,
) -> None:
    """
    Project Thunder - sign in to the consultant onboarding API.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        overrides = {}
        if base_url:
            overrides["base_url"] = base_url
        if token_dir:
            overrides["token_dir"] = token_dir
        config = replace(ThunderConfig.from_env(), **overrides)
    except ThunderAuthError as e:
        print_error(str(e))
        sys.exit(1)

    if verbose:
        click.echo(f"+ API server: {config.base_url}")
        click.echo(f"+ Token directory: {config.token_dir}")

    auth = AuthService(config=config)
    ctx.call_on_close(auth.network.transport.close)
    ctx.obj = CLIContext(config=config, auth=auth, verbose=verbose)


@cli.command()
@click.option("--name", "display_name", required=True, help="Display name")
@click.option("--email", required=True, help="Account email")
@click.option("--phone", "phone_number", required=True, help="Phone number")
@click.password_option()
@click.pass_obj
@handle_errors
def register(
    obj: CLIContext, display_name: str, email: str, phone_number: str, password: str
) -> None:
    """Create a new account."""
    response = obj.auth.register(display_name, email, password, phone_number)
    report(response, "Account created. Check your email to confirm it.")


@cli.command()
@click.argument("email")
@click.password_option(confirmation_prompt=False)
@click.pass_obj
@handle_errors
def login(obj: CLIContext, email: str, password: str) -> None:
    """Sign in, prompting for a two-factor code if the server asks for one."""
    response = obj.auth.login(email, password)

    if response.requires_two_factor:
        print_warning(response.message or "Two-factor code required")
        code = click.prompt("Two-factor code")
        response = obj.auth.two_factor_login(email, password, code)

    report(response, "Signed in.")
    if response.is_success and response.data and response.data.user:
        user = response.data.user
        click.echo(f"Welcome, {user.display_name or user.email}")


@cli.command("two-factor")
@click.argument("email")
@click.argument("code")
@click.password_option(confirmation_prompt=False)
@click.pass_obj
@handle_errors
def two_factor(obj: CLIContext, email: str, code: str, password: str) -> None:
    """Complete a sign-in with a two-factor code."""
    report(obj.auth.two_factor_login(email, password, code), "Signed in.")


@cli.command("forgot-password")
@click.argument("email")
@click.pass_obj
@handle_errors
def forgot_password(obj: CLIContext, email: str) -> None:
    """Request a password reset email."""
    report(obj.auth.forgot_password(email), "Password reset email sent.")


@cli.command("reset-password")
@click.option("--user-id", required=True, help="User ID from the reset email")
@click.option("--token", required=True, help="Reset token from the reset email")
@click.password_option("--new-password")
@click.pass_obj
@handle_errors
def reset_password(obj: CLIContext, user_id: str, token: str, new_password: str) -> None:
    """Set a new password."""
    # click has already asked for the confirmation
    response = obj.auth.reset_password(user_id, token, new_password, new_password)
    report(response, "Password changed.")


@cli.command("confirm-email")
@click.option("--user-id", required=True, help="User ID from the confirmation email")
@click.option("--token", required=True, help="Token from the confirmation email")
@click.pass_obj
@handle_errors
def confirm_email(obj: CLIContext, user_id: str, token: str) -> None:
    """Confirm an email address."""
    report(obj.auth.confirm_email(user_id, token), "Email confirmed.")


@cli.command()
@click.pass_obj
@handle_errors
def refresh(obj: CLIContext) -> None:
    """Refresh the access token."""
    report(obj.auth.refresh_token(), "Access token refreshed.")


@cli.command()
@click.pass_obj
@handle_errors
def logout(obj: CLIContext) -> None:
    """Forget stored credentials."""
    obj.auth.logout()
    print_success("Signed out.")


@cli.command()
@click.pass_obj
@handle_errors
def status(obj: CLIContext) -> None:
    """Show stored token status."""
    token_status = obj.auth.credential_store.get_token_status()

    if not token_status["authorized"]:
        print_warning("Not signed in")
        if token_status["has_refresh_token"]:
            click.echo("A refresh token is stored; run 'thunder refresh'.")
        sys.exit(1)

    if token_status["valid"]:
        print_success("Signed in")
    else:
        print_warning("Access token expired or expiring soon")

    if "expires_in_seconds" in token_status:
        remaining = format_time_remaining(token_status["expires_in_seconds"])
        click.echo(f"Expires:   {token_status['expires_at']} ({remaining})")
    click.echo(f"Refresh:   {'stored' if token_status['has_refresh_token'] else 'none'}")


if __name__ == "__main__":
    cli()
