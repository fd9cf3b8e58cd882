"""
Package entry point.

Allows running the application via:

    python -m nustudy

This simply forwards execution to nustudy.cli.main().
"""

from nustudy.cli import main

if __name__ == "__main__":
    main()
