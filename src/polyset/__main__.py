from polyset.cli import main

raise SystemExit(main())
