import sys

from rh.cli import main

sys.exit(main())
