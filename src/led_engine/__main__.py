import sys

from led_engine.cli import main

sys.exit(main())
