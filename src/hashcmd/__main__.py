import sys

from hashcmd.cli import main

sys.exit(main())
