import sys

from household_ledger.cli import main

sys.exit(main())
