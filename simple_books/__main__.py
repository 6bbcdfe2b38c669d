import sys

from simple_books.cli import main

sys.exit(main())
