import sys

from itl.cli import main

sys.exit(main())
