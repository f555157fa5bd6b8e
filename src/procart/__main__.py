import sys

from procart.cli import main

if __name__ == "__main__":
    sys.exit(main())
