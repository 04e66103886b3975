"""
Run liquidity pool reports from CLI.

Usage: python -m scripts.run_report --report-type audit
"""

from __future__ import annotations

from app.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
