"""
Create count_data_table from the command line.

Usage:
    python -m countdata.database.init_db
"""

from __future__ import annotations

import sys

from countdata.config import get_settings
from countdata.core.exceptions import BackendFailure
from countdata.database.count_store import init_table


def main() -> int:
    settings = get_settings()
    print("DB:", settings.database_label)
    print("Creating count_data_table...")
    try:
        init_table()
    except BackendFailure as e:
        print(f"Failed: {e}", file=sys.stderr)
        return 1
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
