#!/usr/bin/env python3
"""
Sazan - crop images into grids and tile archives.

This is the main entry point for the Sazan application.

Available commands:
- crop-grid: Crop images and montage them into a single grid image
- crop-split: Split images into tiles packaged as a ZIP archive
- api: A FastAPI-based API server for programmatic access
"""

import sys

from sazan.cli import main as cli_main


def main():
    """Main entry point for the application."""
    try:
        # Hand off control to the CLI module, which handles command selection
        exit_code = cli_main()
    except KeyboardInterrupt:
        print("\nExiting Sazan...")
        exit_code = 130
    except Exception as e:
        print(f"An error occurred: {e}", file=sys.stderr)
        print("Exiting Sazan...", file=sys.stderr)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
