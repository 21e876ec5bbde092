"""Run the exporter with ``python -m fronius_exporter``."""

import sys

from .exporter import main

sys.exit(main())
