"""Allow running as ``python -m claude_locator``."""

from claude_locator.cli import app

if __name__ == "__main__":
    app()
