"""Theme configuration for minibar.

Provides the colour palette for the status area and builds the CSS of the
reference app.
"""

from dataclasses import dataclass, field


@dataclass
class ColorPalette:
    """Color palette for the UI theme.

    Catppuccin Mocha-inspired palette with warm, muted tones.
    """
    # Background colors (warm dark)
    background: str = "#1e1e2e"     # Base background
    surface: str = "#313244"        # Status area (surface0)
    surface_light: str = "#45475a"  # Input surface (surface1)

    # Text colors
    text: str = "#cdd6f4"           # Primary text (soft lavender-white)
    text_muted: str = "#6c7086"     # Status summary (overlay1)

    # Accent colors
    primary: str = "#b4befe"        # Lavender - separator line
    border: str = "#45475a"         # surface1


@dataclass
class Theme:
    """Complete theme configuration."""
    name: str = "default"
    colors: ColorPalette = field(default_factory=ColorPalette)

    def status_css(self, enhance_visual: bool = True, display_thin_line: bool = True) -> str:
        """CSS for the status area and the input surface.

        ``enhance_visual`` gives the status area its own background;
        ``display_thin_line`` draws a one-cell rule above it.
        """
        c = self.colors
        background = c.surface if enhance_visual else c.background
        rule = f"border-top: hkey {c.primary};" if display_thin_line else ""
        return f"""
    Screen {{
        background: {c.background};
    }}

    #status-area {{
        width: 100%;
        height: 1;
        padding: 0;
        background: {background};
        color: {c.text};
        {rule}
    }}

    #status-area.-command-running {{
        color: {c.text_muted};
    }}

    #minibuffer {{
        display: none;
        border: none;
        height: 1;
        padding: 0 1;
        background: {c.surface_light};
        color: {c.text};
    }}
    """


# Default theme instance
DEFAULT_THEME = Theme()
