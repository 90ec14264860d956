import sys

from compdb.cli import main

sys.exit(main())
