"""CLI entrypoint for the slideshow builder."""

import sys

from frame_slideshow.cli import main

if __name__ == "__main__":
    sys.exit(main())
