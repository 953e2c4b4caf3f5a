#!/usr/bin/env python3
"""
Fetch a printer's maintenance CSV once and show what the exporter makes of it
"""

import sys
import time

from brother_exporter.config import get_config
from brother_exporter.errors import ClassificationError, UpstreamError
from brother_exporter.exposition.sink import render_observations
from brother_exporter.fetch import fetch_maintenance_csv
from brother_exporter.maintenance_info import MaintenanceInfoReader
from brother_exporter.schema.registry import default_registry


def scrape(address: str, repeat: int = 1, delay: float = 5.0) -> int:
    """
    Scrape a printer one or more times and print the exposition.

    Args:
        address: URL of the maintenance CSV
        repeat: Number of scrapes
        delay: Seconds between scrapes

    Returns:
        Process exit status
    """
    print("=" * 60)
    print("Scraping Brother Printer Maintenance Info")
    print("=" * 60)

    config = get_config()

    print(f"\n1. Building schema registry...")
    reader = MaintenanceInfoReader(default_registry(config.exporter.schema_file))
    print(f"✓ {len(reader.registry)} model(s): {', '.join(reader.registry.model_names)}")

    print(f"\n2. Scraping {address} ({repeat} time(s), {delay}s apart)")

    failures = 0
    for attempt in range(1, repeat + 1):
        start_time = time.time()
        try:
            body = fetch_maintenance_csv(address, config.upstream)
            observations = reader.read(body)
        except UpstreamError as e:
            failures += 1
            print(f"   ✗ [{attempt}] fetch failed: {e}")
        except ClassificationError as e:
            failures += 1
            print(f"   ✗ [{attempt}] rejected: {e}")
        else:
            elapsed = time.time() - start_time
            print(f"   ✓ [{attempt}] {len(observations)} observations in {elapsed:.2f}s")
            if attempt == repeat:
                print()
                print(render_observations(observations, config.exporter.namespace).decode("utf-8"))

        if attempt < repeat:
            time.sleep(delay)

    print("\n" + "=" * 60)
    if failures:
        print(f"✗ {failures} of {repeat} scrape(s) failed")
    else:
        print("✓ All scrapes succeeded")
    print("=" * 60)
    return 1 if failures else 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(f"usage: {sys.argv[0]} URL [REPEAT]")
        sys.exit(2)

    repeat = int(sys.argv[2]) if len(sys.argv) > 2 else 1
    sys.exit(scrape(sys.argv[1], repeat=repeat))
