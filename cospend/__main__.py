import sys

from cospend.cli.main import main

sys.exit(main())
