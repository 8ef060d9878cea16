import sys

from resource_monitor.main import main

sys.exit(main())
