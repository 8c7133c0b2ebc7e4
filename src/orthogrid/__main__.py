"""Launch the animated cube grid."""
import sys

from orthogrid.app.main import main

if __name__ == "__main__":
    sys.exit(main())
