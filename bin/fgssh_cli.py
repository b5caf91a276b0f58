#!/usr/bin/python3
import sys

from fgslib.cli import main


if __name__ == "__main__":
    sys.exit(main())
