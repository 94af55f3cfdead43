import sys

from taxifare.cli import main

sys.exit(main())
