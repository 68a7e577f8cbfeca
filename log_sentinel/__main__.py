import sys

from log_sentinel.cli import main

sys.exit(main())
