# config.py
# App-wide constants and logging setup.

import logging
import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent

# The packaged table can be swapped for another year's data without code changes.
TAX_TABLE_PATH = Path(
    os.environ.get("MOUNTAIN_TAXES_TAX_TABLES", PACKAGE_DIR / "data" / "state_tax_tables.json")
)

DEFAULT_STATE = "Colorado"

# (min, max, step) of the chart's x axis on first load
DEFAULT_INCOME_RANGE = (0, 100_000, 10_000)

# Buttons offered by the range controls, label -> dollars
RANGE_INCREMENTS = {
    "+$10K": 10_000,
    "+$100K": 100_000,
    "+$1M": 1_000_000,
    "+$10M": 10_000_000,
}

MAX_CHART_POINTS = 10_000
MAX_INCOME = 2 ** 52  # keeps income arithmetic exact in float

COLOR_PALETTE = [
    "#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#9966FF",
    "#FF9F40", "#C9CBCF", "#2E8B57", "#8B4513", "#1F77B4",
]

LOG_LEVEL_ENV = "MOUNTAIN_TAXES_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None):
    """Configure root logging once for the app.

    ``level`` defaults to ``$MOUNTAIN_TAXES_LOG_LEVEL`` or INFO.  The library
    modules only create loggers; handlers are set up here by the entry point.
    """
    level = level or os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("mountain_taxes").setLevel(level)
    return level
