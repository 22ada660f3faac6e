import sys

from project_notifier.main import main

sys.exit(main())
