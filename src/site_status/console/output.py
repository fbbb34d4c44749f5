"""Central console output manager for Rich-formatted output.

This module provides the ConsoleManager class that coordinates all Rich console
output throughout the application, ensuring consistent formatting and handling
debug mode appropriately.
"""

from typing import Optional, Dict, Any
import traceback
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text
from .themes import get_theme, ICONS


class ConsoleManager:
    """Central console output manager.

    Attributes:
        console: Rich Console instance
        debug_mode: Whether debug mode is enabled
        theme: Rich Theme for consistent styling
    """

    def __init__(self, debug_mode: bool = False, console: Optional[Console] = None):
        """Initialize the ConsoleManager.

        Args:
            debug_mode: If True, display stack traces with errors
            console: Optional Console to write to instead of a new one
        """
        self.debug_mode = debug_mode
        self.theme = get_theme()
        if console is None:
            console = Console(theme=self.theme)
        else:
            console.push_theme(self.theme)
        self.console = console

    def print_banner(
        self,
        version: str,
        config_path: str,
        site_count: int,
        output_path: str
    ) -> None:
        """Display application startup banner.

        Args:
            version: Application version string
            config_path: Path to the site configuration being used
            site_count: Number of sites to be checked
            output_path: Where the snapshot will be written
        """
        banner_text = Text()
        banner_text.append("Site Status Monitor\n", style="bold cyan")
        banner_text.append(f"Version: {version}\n\n", style="dim")

        banner_text.append(f"{ICONS['info']} Config: ", style="info")
        banner_text.append(f"{config_path}\n", style="white")

        banner_text.append(f"{ICONS['site']} Sites: ", style="info")
        banner_text.append(f"{site_count}\n", style="white")

        banner_text.append(f"{ICONS['output']} Output: ", style="info")
        banner_text.append(output_path, style="white")

        if self.debug_mode:
            banner_text.append("\n\n", style="white")
            banner_text.append(f"{ICONS['warning']} Debug Mode: ", style="warning")
            banner_text.append("ENABLED", style="bold yellow")

        panel = Panel(
            banner_text,
            title="[bold]Application Startup[/bold]",
            border_style="cyan",
            padding=(1, 2)
        )

        self.console.print(panel)
        self.console.print()

    def print_error(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        exception: Optional[Exception] = None
    ) -> None:
        """Display error message in Rich Panel format.

        In debug mode the stack trace of exception is shown as well.

        Args:
            message: Error message to display
            details: Optional dictionary with additional context
            exception: Optional exception object for extracting traceback
        """
        error_text = Text()
        error_text.append(f"{ICONS['error']} ", style="error")
        error_text.append(message, style="error")

        if details:
            error_text.append("\n\n", style="white")
            error_text.append("Context:\n", style="bold dim")
            for key, value in details.items():
                error_text.append(f"  {key.replace('_', ' ').title()}: ", style="dim")
                error_text.append(f"{value}\n", style="white")

        suggestion = self._get_error_suggestion(message)
        if suggestion:
            error_text.append("\n", style="white")
            error_text.append(f"{ICONS['info']} Suggestion: ", style="info")
            error_text.append(suggestion, style="cyan")

        panel = Panel(
            error_text,
            title="[bold red]Error[/bold red]",
            border_style="red",
            padding=(1, 2)
        )

        self.console.print(panel)

        if self.debug_mode and exception:
            self._print_traceback(exception)

    def _get_error_suggestion(self, message: str) -> Optional[str]:
        """Get actionable suggestion for common run-level errors.

        Args:
            message: Error message

        Returns:
            Suggestion string or None if no suggestion available
        """
        message_lower = message.lower()

        if 'file not found' in message_lower or 'no such file' in message_lower:
            return "Check that the file path is correct and the file exists. Use absolute paths if needed."

        if 'missing required' in message_lower or 'must be a non-empty string' in message_lower:
            return "Every site needs 'slug', 'name', 'url' and 'host'; 'domain' is optional."

        if 'invalid json' in message_lower or 'invalid yaml' in message_lower:
            return "Fix the syntax error in the site configuration file."

        if 'permission denied' in message_lower or 'access denied' in message_lower:
            return "Check file/directory permissions for the output path."

        if 'no space left' in message_lower:
            return "Free some disk space or choose another output location."

        return None

    def _print_traceback(self, exception: Exception) -> None:
        """Print exception traceback with syntax highlighting.

        Args:
            exception: Exception object to display traceback for
        """
        if not hasattr(exception, '__traceback__'):
            return

        tb_lines = traceback.format_exception(
            type(exception),
            exception,
            exception.__traceback__
        )
        tb_text = ''.join(tb_lines)

        syntax = Syntax(
            tb_text,
            "python",
            theme="monokai",
            line_numbers=True,
            word_wrap=True
        )

        self.console.print()
        self.console.print(Panel(
            syntax,
            title="[bold red]Stack Trace[/bold red]",
            border_style="red",
            padding=(1, 2)
        ))

    def print_success(self, message: str) -> None:
        """Display success message."""
        self.console.print(f"{ICONS['success']} {message}", style="success")
