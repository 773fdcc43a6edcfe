#!/usr/bin/env python3
"""Start the API with uvicorn, honouring the PORT environment variable used by hosting platforms."""

import os
import sys
from pathlib import Path

import uvicorn


def main() -> int:
    port = os.environ.get("PORT", "8000")
    try:
        port_int = int(port)
    except ValueError:
        print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
        port_int = 8000

    src_path = Path(__file__).resolve().parent / "src"
    if not src_path.is_dir():
        print(f"❌ src directory not found at {src_path}", file=sys.stderr)
        return 1
    sys.path.insert(0, str(src_path))

    try:
        import emergewise.main  # noqa: F401
    except ImportError as e:
        print(f"❌ Failed to import emergewise.main: {e}", file=sys.stderr)
        return 1

    print(f"🚀 Starting uvicorn server on port {port_int}...", file=sys.stderr)
    uvicorn.run(
        "emergewise.main:app",
        host="0.0.0.0",
        port=port_int,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
