from tdev.cli import main

raise SystemExit(main())
