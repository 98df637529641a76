import sys

from mapview.cli import main

sys.exit(main())
