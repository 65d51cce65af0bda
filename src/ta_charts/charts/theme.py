"""Dark "purple passion" chart theme as matplotlib rc parameters."""

from matplotlib import cycler

WEB3_COLORS = {
    "dark": "#1A1F2C",
    "purple": "#b69dff",
    "lightpurple": "#D6BCFA",
    "gray": "#8E9196",
    "charcoal": "#292d3e",
    "navy": "#171c2c",
}

#: Rising candles are filled, falling candles are hollow.
CANDLE_UP_COLOR = "#e098c7"
CANDLE_DOWN_COLOR = "#8fd3e8"
CANDLE_BORDER_WIDTH = 1.5

PURPLE_PASSION_RC: dict[str, object] = {
    "figure.facecolor": WEB3_COLORS["dark"],
    "savefig.facecolor": WEB3_COLORS["dark"],
    "axes.facecolor": WEB3_COLORS["dark"],
    "axes.edgecolor": WEB3_COLORS["gray"],
    "axes.labelcolor": WEB3_COLORS["gray"],
    "axes.titlecolor": WEB3_COLORS["lightpurple"],
    "axes.titlesize": "large",
    "axes.grid": True,
    "axes.grid.axis": "y",
    "axes.spines.top": False,
    "axes.spines.right": False,
    "axes.prop_cycle": cycler(
        color=[
            WEB3_COLORS["purple"],
            WEB3_COLORS["lightpurple"],
            WEB3_COLORS["gray"],
            WEB3_COLORS["charcoal"],
            WEB3_COLORS["navy"],
        ]
    ),
    "grid.color": WEB3_COLORS["charcoal"],
    "grid.linewidth": 0.8,
    "xtick.color": WEB3_COLORS["gray"],
    "ytick.color": WEB3_COLORS["gray"],
    "xtick.major.size": 0,
    "text.color": WEB3_COLORS["gray"],
    "lines.linewidth": 3,
    "svg.fonttype": "none",
}
