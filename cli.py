#!/usr/bin/env python
"""
UX Auditor CLI entry point.

Usage:
    python cli.py                                  # Audit TEST_URL
    python cli.py --url https://example.com        # Audit a specific page
    python cli.py --env cicd --gate                # CI run with threshold gate
"""

from src.cli.app import main

if __name__ == "__main__":
    main()
