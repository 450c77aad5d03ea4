import sys

from laravel_shb.cli import main

sys.exit(main())
