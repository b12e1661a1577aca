import sys

from varlink_go_generator.cli import main

sys.exit(main())
