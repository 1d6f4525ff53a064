import sys

from tripclean.cli import main

sys.exit(main())
