"""CLI entry point: python -m clicker.mcp [save_file]"""

from __future__ import annotations

import logging
import sys


def main() -> None:
    # stdout carries the MCP protocol; keep log output on stderr
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    save_path = sys.argv[1] if len(sys.argv) > 1 else None

    from clicker.definition import default_definition
    from clicker.mcp.server import create_server

    server = create_server(default_definition(), save_path=save_path)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
