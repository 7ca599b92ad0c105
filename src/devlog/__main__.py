"""Allow running devlog as a module: python -m devlog."""

from devlog.main import main

if __name__ == "__main__":
    main()
