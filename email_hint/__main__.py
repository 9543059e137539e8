import sys

from email_hint.cli import main

sys.exit(main())
