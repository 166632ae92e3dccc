import sys

from lexparse.cli import main

sys.exit(main())
