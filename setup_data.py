import sys

import requests

from element_decoder.config import configure_logging, load_settings
from element_decoder.elements import MAX_PERIOD, build_grid, load_elements

RAW_URL = "https://raw.githubusercontent.com/Bowserinator/Periodic-Table-JSON/master/PeriodicTableJSON.json"


def main():
    settings = load_settings()
    log = configure_logging(settings.log_level)
    out_file = settings.data_file

    r = requests.get(RAW_URL, timeout=30)
    r.raise_for_status()
    with open(out_file, "wb") as f:
        f.write(r.content)
    print(f"Saved {out_file} ({len(r.content):,} bytes)")

    # Sanity check: every element of periods 1-7 must land on the board
    elements = load_elements(out_file)
    expected = [e for e in elements if e.period is None or e.period <= MAX_PERIOD]
    grid = build_grid(elements)
    if len(grid.cells) != len(expected):
        log.error("Only %d of %d elements have a table position", len(grid.cells), len(expected))
        sys.exit(1)
    if len(expected) < len(elements):
        log.info("Skipped %d element(s) beyond period %d", len(elements) - len(expected), MAX_PERIOD)


if __name__ == "__main__":
    main()
