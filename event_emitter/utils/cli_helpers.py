"""Console output helpers shared by the registry presenter."""

from rich.console import Console

_default_console = Console()


def print_message(
    msg: str,
    icon: str = "",
    indent: int = 0,
    style: str | None = None,
    console: Console | None = None,
):
    """Write one plain-text line to a rich console.

    Markup and highlighting are off, so event names such as ``"[tick]"``
    print literally.

    Args:
        msg: Line to write
        icon: Prefix placed right after the indent
        indent: Leading spaces
        style: Rich style applied to the whole line
        console: Target console; the module's stdout console when omitted
    """
    prefix = " " * indent
    (console or _default_console).print(
        f"{prefix}{icon}{msg}", style=style, markup=False, highlight=False
    )


def print_warning(msg: str, indent: int = 0, console: Console | None = None):
    """Write a yellow line prefixed with a warning sign.

    Used for events holding more listeners than their threshold.
    """
    print_message(msg, icon="⚠️", indent=indent, style="yellow", console=console)


def print_info(msg: str, indent: int = 2, console: Console | None = None):
    """Write an indented notice, e.g. a listener removal report."""
    print_message(msg, indent=indent, console=console)
