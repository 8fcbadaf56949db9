import sys

from central_release.cli.release import main

sys.exit(main())
