"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the browser chrome (columns, bars, help modal).
Syntax highlighting inside file previews is a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    divider: str
    title: str
    path_bar: str
    column_heading: str
    entry_dir: str
    entry_file: str
    entry_label: str
    selected_inactive: str
    status_key: str
    status_dim: str
    status_on: str
    status_error: str
    status_success: str
    search_prompt: str
    preview_heading: str
    preview_label: str
    preview_dim: str
    preview_hint: str
    help_heading: str
    help_key: str
    help_border: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2m",
    title="\033[1;38;5;229m",
    path_bar="\033[38;5;229m",
    column_heading="\033[2;38;5;250m",
    entry_dir="\033[1;36m",
    entry_file="\033[38;5;252m",
    entry_label="\033[2;38;5;250m",
    selected_inactive="\033[38;5;81m",
    status_key="\033[36m",
    status_dim="\033[2;38;5;250m",
    status_on="\033[32m",
    status_error="\033[31m",
    status_success="\033[32m",
    search_prompt="\033[1;33m",
    preview_heading="\033[36m",
    preview_label="\033[2m",
    preview_dim="\033[2;38;5;250m",
    preview_hint="\033[33m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_border="\033[38;5;45m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    divider="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    path_bar="\033[38;5;153m",
    column_heading="\033[2;38;5;110m",
    entry_dir="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    entry_label="\033[2;38;5;73m",
    selected_inactive="\033[38;5;45m",
    status_key="\033[38;5;39m",
    status_dim="\033[2;38;5;110m",
    status_on="\033[38;5;84m",
    status_error="\033[38;5;203m",
    status_success="\033[38;5;84m",
    search_prompt="\033[1;38;5;153m",
    preview_heading="\033[38;5;45m",
    preview_label="\033[2;38;5;110m",
    preview_dim="\033[2;38;5;110m",
    preview_hint="\033[38;5;153m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_border="\033[38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="\033[7m",
    divider="",
    title="",
    path_bar="",
    column_heading="",
    entry_dir="",
    entry_file="",
    entry_label="",
    selected_inactive="",
    status_key="",
    status_dim="",
    status_on="",
    status_error="",
    status_success="",
    search_prompt="",
    preview_heading="",
    preview_label="",
    preview_dim="",
    preview_hint="",
    help_heading="",
    help_key="",
    help_border="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return the theme for ``name``; unknown names fall back to default.

    ``no_color`` always wins and selects the plain palette, which keeps only
    reverse video so the selected row stays visible.
    """
    if no_color:
        return PLAIN_THEME
    candidate = (name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
]
