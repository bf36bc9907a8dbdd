import sys

from icstools.cli import main

sys.exit(main())
