import sys

from pydink.cli import main

sys.exit(main())
