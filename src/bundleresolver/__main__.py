"""Allow running as `python -m bundleresolver`."""

from .cli import main

main()
