"""Status lines for the Lodestar CLI.

Every helper writes to stderr so stdout stays clean for piping, and picks an
emoji glyph only when the stream's encoding can represent it.
"""

import click


def _encodable(glyph: str) -> bool:
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        glyph.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(emoji: str, fallback: str) -> str:
    return emoji if _encodable(emoji) else fallback


def caution_glyph() -> str:
    """Return "⚠️" or the ASCII fallback "[!]"."""
    return _glyph("⚠️", "[!]")  # pragma: no mutate


def success_glyph() -> str:
    """Return "✅" or the ASCII fallback "[OK]"."""
    return _glyph("✅", "[OK]")  # pragma: no mutate


def error_glyph() -> str:
    """Return "❌" or the ASCII fallback "[X]"."""
    return _glyph("❌", "[X]")  # pragma: no mutate


def warn(msg: str) -> None:
    """Print a bold yellow warning, e.g. ``⚠️  Too many timeframes (11).``"""
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Print a bold green confirmation, e.g. ``✅  Roadmap is valid.``"""
    click.secho(f"{success_glyph()}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Print a bold red failure, e.g. ``❌  Cannot connect to database``."""
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)
