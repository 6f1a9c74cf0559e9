import sys

from pktview.cli import main

sys.exit(main())
