import sys

from denim.cli import main

sys.exit(main())
