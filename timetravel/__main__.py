from timetravel.cli import main

raise SystemExit(main())
