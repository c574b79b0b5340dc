import sys

from nextforge.cli import main

sys.exit(main())
