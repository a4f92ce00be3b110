import sys

from story_desk.cli import main

sys.exit(main())
