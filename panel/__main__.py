"""Serve the control panel with uvicorn."""

import argparse
import os

import uvicorn


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(prog="codespace-panel", description="Serve the codespace control panel")
    parser.add_argument("--host", default=os.environ.get("PANEL_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PANEL_PORT", "3000")))
    args = parser.parse_args()
    uvicorn.run("panel.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
