"""
  python -m codedigest [ROOT] [options]
"""

from codedigest.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
