#!/usr/bin/env python3
"""Export the OpenAPI schema for the browser client.

Usage:
    python scripts/export_openapi.py [output.json]

API keys only need to be present, not valid; the app is not started.
"""

import json
import sys
from pathlib import Path

from makia.main import create_app


def main() -> None:
    output = Path(sys.argv[1] if len(sys.argv) > 1 else "openapi.json")
    app = create_app()
    output.write_text(json.dumps(app.openapi(), indent=2) + "\n", encoding="utf-8")
    print(f"✅ OpenAPI schema written to {output}")


if __name__ == "__main__":
    main()
