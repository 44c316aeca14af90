"""Run the pysecureid tool: python -m pysecureid"""

import sys

from pysecureid.cli import main

sys.exit(main())
