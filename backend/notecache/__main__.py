"""Allows `python -m notecache -h HOST -p PORT -c CACHE_DIR`."""

from notecache.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
