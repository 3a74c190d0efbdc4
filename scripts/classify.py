# scripts/classify.py
import sys

from grapherrors.cli import main

if __name__ == "__main__":
    sys.exit(main())
