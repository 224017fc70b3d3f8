import sys

from whois_checker.cli import main

sys.exit(main())
